"""Orchestrates a relay run from a reconciled configuration."""

import asyncio
import time

import structlog

from block_relayer.configuration.exceptions import InvalidSyncSettingError
from block_relayer.configuration.models import RelayConfig, SyncMode
from block_relayer.rpc.client import TrustedBlockRPCClient
from block_relayer.rpc.height import get_current_block_number
from block_relayer.synchronize.relay import BlockRelayer, HeightReader, ProgressReporter
from block_relayer.synchronize.results import RelayResult

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def run_relay_workflow(
    config: RelayConfig,
    stop_event: asyncio.Event | None = None,
    report: ProgressReporter | None = None,
    height_reader: HeightReader = get_current_block_number,
) -> RelayResult:
    """Run the start workflow: open both node clients and relay in the configured mode.

    Both HTTP clients are closed however the run ends.
    """
    start_time = time.time()
    logger.info(
        "Starting relay",
        mode=config.mode.value,
        writer_ap=config.writer_ap,
        reader_ap=config.reader_ap,
        target=config.target,
        single_block=config.single_block,
    )
    async with TrustedBlockRPCClient.create(config.writer_ap) as writer, TrustedBlockRPCClient.create(config.reader_ap) as reader:
        relayer = BlockRelayer(
            writer=writer,
            reader=reader,
            height_reader=height_reader,
            safety_margin=config.safety_margin,
            poll_interval=config.poll_interval,
            stop_event=stop_event,
            report=report,
        )
        if config.mode == SyncMode.SINGLE:
            if config.single_block is None:
                raise InvalidSyncSettingError("Single mode requires a single block height")
            result = await relayer.relay_single_block(config.single_block)
        elif config.mode == SyncMode.TARGET:
            if config.target is None:
                raise InvalidSyncSettingError("Target mode requires a target height")
            result = await relayer.relay_to_target(config.target)
        else:
            result = await relayer.relay_continuously()

    end_time = time.time()
    logger.info(
        "Finished relay",
        mode=config.mode.value,
        blocks_imported=result.blocks_imported,
        reader_height=result.reader_height,
        duration=round(end_time - start_time, 2),
    )
    return result
