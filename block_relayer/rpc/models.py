"""Pydantic models for the JSON-RPC 2.0 envelope and the opaque block handle."""

from typing import Any, NewType

from pydantic import BaseModel, ConfigDict

BlockHandle = NewType("BlockHandle", str)
"""Serialized block exactly as the writer returned it. Never parsed by the relayer."""


class JSONRPCRequest(BaseModel):
    """A JSON-RPC 2.0 request with positional parameters."""

    jsonrpc: str = "2.0"
    method: str
    params: list[Any]
    id: int = 1


class JSONRPCErrorObject(BaseModel):
    """The error member of a JSON-RPC response."""

    code: int
    message: str
    data: Any = None


class JSONRPCResponse(BaseModel):
    """A JSON-RPC 2.0 response.

    Nodes differ in which extra members they send back, so unknown members are
    ignored. ``result`` is left untyped here; callers decide what they expect.
    """

    model_config = ConfigDict(extra="ignore")

    jsonrpc: str | None = None
    id: int | str | None = None
    result: Any = None
    error: JSONRPCErrorObject | None = None
