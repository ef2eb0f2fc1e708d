"""Reads a node's current block height through the standard eth_blockNumber call."""

import structlog
from web3 import AsyncHTTPProvider, AsyncWeb3

from .exceptions import TransportError

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def get_current_block_number(endpoint: str) -> int:
    """Return the latest block number known to the node at ``endpoint``.

    A fresh provider session is opened for every query and always released
    before returning.

    Raises:
        TransportError: If the endpoint is unreachable or the call fails.
    """
    provider = AsyncHTTPProvider(endpoint)
    w3 = AsyncWeb3(provider)
    try:
        block_number = await w3.eth.block_number
    except Exception as e:
        raise TransportError(endpoint, f"eth_blockNumber failed: {e}") from e
    finally:
        await provider.disconnect()
    logger.debug("Read current block number", endpoint=endpoint, block_number=block_number)
    return int(block_number)
