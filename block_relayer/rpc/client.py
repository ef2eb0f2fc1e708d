"""JSON-RPC client for the admin_retrieveTrustedBlock / admin_importTrustedBlock extension."""

from types import TracebackType
from typing import Any, Self

import httpx
import structlog
from pydantic import ValidationError

from block_relayer.utils.constants import IMPORT_TRUSTED_BLOCK_METHOD, RETRIEVE_TRUSTED_BLOCK_METHOD

from .abc import TrustedBlockClientBase
from .exceptions import MalformedResponseError, RpcError, TransportError
from .models import BlockHandle, JSONRPCRequest, JSONRPCResponse

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class TrustedBlockRPCClient(TrustedBlockClientBase):
    """Talks to one node endpoint over HTTP POST."""

    def __init__(self, http_client: httpx.AsyncClient, endpoint: str) -> None:
        """Initialize the client with an already-initialized HTTP client."""
        self.http_client = http_client
        self.endpoint = endpoint

    @classmethod
    def create(cls, endpoint: str, transport: httpx.AsyncBaseTransport | None = None) -> Self:
        """Create a client for the given endpoint.

        No timeout is configured, so a hung peer blocks the caller until the
        connection is dropped.

        Args:
            endpoint: URL of the node's RPC interface.
            transport: Optional transport override, mostly useful in tests.

        Returns:
            Configured TrustedBlockRPCClient instance.
        """
        logger.debug("Creating RPC client", endpoint=endpoint)
        return cls(httpx.AsyncClient(timeout=None, transport=transport), endpoint)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.http_client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.close()

    async def call(self, method: str, params: list[Any]) -> Any:
        """Issue a JSON-RPC 2.0 call and return the decoded result member.

        Args:
            method: JSON-RPC method name.
            params: Positional parameters.

        Raises:
            TransportError: If the HTTP request itself fails.
            RpcError: If the status code is not 200 or the response has an error member.
            MalformedResponseError: If the body is not a JSON-RPC response object.

        Returns:
            The value of the response's result member, or None when it is absent.
        """
        payload = JSONRPCRequest(method=method, params=params)
        logger.debug("Sending JSON-RPC request", endpoint=self.endpoint, method=method, params=params)
        try:
            response = await self.http_client.post(self.endpoint, json=payload.model_dump())
        except httpx.HTTPError as exc:
            raise TransportError(self.endpoint, str(exc) or type(exc).__name__) from exc

        body = response.text
        if response.status_code != 200:
            logger.error("Node returned non-200 status", endpoint=self.endpoint, method=method, status_code=response.status_code)
            raise RpcError(self.endpoint, method, body or response.reason_phrase, status_code=response.status_code)

        try:
            decoded = JSONRPCResponse.model_validate_json(body)
        except ValidationError as exc:
            raise MalformedResponseError(self.endpoint, method, "body is not a JSON-RPC response object", body) from exc

        if decoded.error is not None:
            logger.error(
                "Node returned JSON-RPC error",
                endpoint=self.endpoint,
                method=method,
                code=decoded.error.code,
                message=decoded.error.message,
            )
            raise RpcError(
                self.endpoint,
                method,
                decoded.error.message,
                status_code=response.status_code,
                code=decoded.error.code,
                data=decoded.error.data,
            )

        return decoded.result

    async def _retrieve_trusted_block(self, params: list[Any]) -> BlockHandle:
        """Retrieve a block and insist on a string result."""
        result = await self.call(RETRIEVE_TRUSTED_BLOCK_METHOD, params)
        if not isinstance(result, str):
            raise MalformedResponseError(
                self.endpoint,
                RETRIEVE_TRUSTED_BLOCK_METHOD,
                f"expected a serialized block string, got {type(result).__name__}",
                repr(result),
            )
        return BlockHandle(result)

    async def retrieve_trusted_block_by_number(self, block_number: int) -> BlockHandle:
        """Retrieve a serialized trusted block from the node by height."""
        return await self._retrieve_trusted_block([False, False, block_number])

    async def retrieve_trusted_block_by_hash(self, block_hash: str) -> BlockHandle:
        """Retrieve a serialized trusted block from the node by hash."""
        return await self._retrieve_trusted_block([False, True, block_hash])

    async def import_trusted_block(self, block: BlockHandle) -> None:
        """Submit a serialized trusted block to the node.

        Whatever the node returns as a result is ignored.
        """
        await self.call(IMPORT_TRUSTED_BLOCK_METHOD, [block])
