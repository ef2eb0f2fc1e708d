"""Contains the block relay loop for the single, target, and continuous sync modes."""

import asyncio
from typing import Awaitable, Callable

import structlog

from block_relayer.configuration.models import SyncMode
from block_relayer.rpc.abc import TrustedBlockClientBase
from block_relayer.rpc.height import get_current_block_number
from block_relayer.synchronize.results import RelayResult
from block_relayer.utils.constants import DEFAULT_POLL_INTERVAL, DEFAULT_SAFETY_MARGIN

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

HeightReader = Callable[[str], Awaitable[int]]
ProgressReporter = Callable[[str], None]


class BlockRelayer:
    """Moves trusted blocks from a writer node to a reader node, one at a time.

    Every network call is awaited before the next one starts. Any error raised
    by a client or the height reader aborts the run as-is.
    """

    def __init__(
        self,
        writer: TrustedBlockClientBase,
        reader: TrustedBlockClientBase,
        height_reader: HeightReader = get_current_block_number,
        safety_margin: int = DEFAULT_SAFETY_MARGIN,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        stop_event: asyncio.Event | None = None,
        report: ProgressReporter | None = None,
    ) -> None:
        """Initialize the relayer with connected writer and reader clients."""
        self.writer = writer
        self.reader = reader
        self.height_reader = height_reader
        self.safety_margin = safety_margin
        self.poll_interval = poll_interval
        self.stop_event = stop_event if stop_event is not None else asyncio.Event()
        self.report = report

    def _report(self, message: str) -> None:
        if self.report is not None:
            self.report(message)

    async def _wait_for_stop(self) -> bool:
        """Sleep for one poll interval, returning early with True if a stop was requested."""
        try:
            await asyncio.wait_for(self.stop_event.wait(), timeout=self.poll_interval)
        except asyncio.TimeoutError:
            return False
        return True

    async def relay_block(self, block_number: int) -> None:
        """Fetch one block from the writer and import it into the reader unchanged."""
        block = await self.writer.retrieve_trusted_block_by_number(block_number)
        logger.debug("Retrieved trusted block", block_number=block_number, size=len(block), endpoint=self.writer.endpoint)
        await self.reader.import_trusted_block(block)
        logger.debug("Imported trusted block", block_number=block_number, endpoint=self.reader.endpoint)

    async def read_heights(self) -> tuple[int, int]:
        """Read the reader's then the writer's current block number."""
        reader_height = await self.height_reader(self.reader.endpoint)
        writer_height = await self.height_reader(self.writer.endpoint)
        logger.info("Read current heights", reader_height=reader_height, writer_height=writer_height)
        return reader_height, writer_height

    async def relay_single_block(self, block_number: int) -> RelayResult:
        """Import exactly one block without looking at either node's height."""
        logger.info("Relaying single block", block_number=block_number)
        await self.relay_block(block_number)
        self._report(f"Imported single block #{block_number}")
        return RelayResult(SyncMode.SINGLE, blocks_imported=1, target=block_number)

    async def relay_to_target(self, target: int) -> RelayResult:
        """Import blocks until the reader is at ``target``.

        There is no safety margin here; the caller is expected to name a height
        the writer already considers final.
        """
        reader_height, writer_height = await self.read_heights()
        if target > writer_height:
            logger.warning("Target is ahead of the writer's current height", target=target, writer_height=writer_height)

        imported = 0
        while target > reader_height:
            if self.stop_event.is_set():
                logger.info("Stop requested before target was reached", reader_height=reader_height, target=target)
                return RelayResult(SyncMode.TARGET, blocks_imported=imported, reader_height=reader_height, target=target)
            await self.relay_block(reader_height + 1)
            reader_height += 1
            imported += 1
            self._report(f"Imported #{reader_height}, Target #{target}")

        self._report("Target reached.")
        logger.info("Target reached", reader_height=reader_height, target=target, blocks_imported=imported)
        return RelayResult(SyncMode.TARGET, blocks_imported=imported, reader_height=reader_height, target=target)

    async def relay_continuously(self) -> RelayResult:
        """Keep the reader ``safety_margin`` blocks behind the writer until stopped.

        Without a stop request this never returns.
        """
        reader_height, writer_height = await self.read_heights()
        imported = 0
        while not self.stop_event.is_set():
            while writer_height - reader_height > self.safety_margin:
                if self.stop_event.is_set():
                    break
                await self.relay_block(reader_height + 1)
                reader_height += 1
                imported += 1
                self._report(f"Imported #{reader_height}, Target #{writer_height - self.safety_margin}")
            if self.stop_event.is_set():
                break

            self._report("Waiting for new target...")
            writer_height = await self.height_reader(self.writer.endpoint)
            logger.debug("Refreshed writer height", writer_height=writer_height, reader_height=reader_height)
            if await self._wait_for_stop():
                break

        logger.info("Continuous relay stopped", reader_height=reader_height, blocks_imported=imported)
        return RelayResult(SyncMode.CONTINUOUS, blocks_imported=imported, reader_height=reader_height)
