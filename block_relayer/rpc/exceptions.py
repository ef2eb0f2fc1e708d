"""Contains exceptions raised while talking to writer and reader nodes."""

from typing import Any


class RelayerError(Exception):
    """Base class for every error that aborts a relay run."""

    pass


class TransportError(RelayerError):
    """Raised when an endpoint cannot be reached or the connection fails."""

    def __init__(self, endpoint: str, message: str) -> None:
        """Initializes the exception with the endpoint that could not be reached."""
        super().__init__(f"Failed to reach {endpoint}: {message}")
        self.endpoint = endpoint


class RpcError(RelayerError):
    """Raised when a node answers with a non-200 status or a JSON-RPC error member."""

    def __init__(self, endpoint: str, method: str, message: str, status_code: int | None = None, code: int | None = None, data: Any = None) -> None:
        """Initializes the exception with the failing method and whatever the node reported."""
        super().__init__(f"{method} failed on {endpoint}: {message}")
        self.endpoint = endpoint
        self.method = method
        self.status_code = status_code
        self.code = code
        self.data = data


class MalformedResponseError(RelayerError):
    """Raised when a response body is not a usable JSON-RPC response."""

    def __init__(self, endpoint: str, method: str, message: str, body: str) -> None:
        """Initializes the exception with the raw body that could not be used."""
        super().__init__(f"Malformed {method} response from {endpoint}: {message}")
        self.endpoint = endpoint
        self.method = method
        self.body = body
