"""Base ABC for trusted block RPC clients."""

from abc import ABC, abstractmethod
from typing import Any

from .models import BlockHandle


class TrustedBlockClientBase(ABC):
    """Base ABC for clients of the trusted block JSON-RPC extension."""

    endpoint: str

    @abstractmethod
    async def call(self, method: str, params: list[Any]) -> Any:
        """Issue a raw JSON-RPC call and return its result member."""
        pass

    # Retrieval
    @abstractmethod
    async def retrieve_trusted_block_by_number(self, block_number: int) -> BlockHandle:
        """Retrieve a serialized trusted block by its height."""
        pass

    @abstractmethod
    async def retrieve_trusted_block_by_hash(self, block_hash: str) -> BlockHandle:
        """Retrieve a serialized trusted block by its hash."""
        pass

    # Import
    @abstractmethod
    async def import_trusted_block(self, block: BlockHandle) -> None:
        """Import a serialized trusted block."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release any connections held by the client."""
        pass
