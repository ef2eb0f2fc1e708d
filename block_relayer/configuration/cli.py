"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import signal
import sys
from typing import Any

import structlog
import typer
from dotenv import load_dotenv
from typer import Option
from typing_extensions import Annotated

from block_relayer.configuration.env import Settings
from block_relayer.configuration.exceptions import InvalidEndpointError, InvalidSyncSettingError
from block_relayer.configuration.models import RelayConfig
from block_relayer.configuration.reconcile import reconcile_relay_configuration
from block_relayer.rpc.exceptions import RelayerError
from block_relayer.synchronize.driver import run_relay_workflow
from block_relayer.synchronize.results import RelayResult
from block_relayer.utils.logging import configure_logging

load_dotenv()

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

typer_app = typer.Typer(name="block-relayer", help="A simple block relayer.", pretty_exceptions_show_locals=False)


@typer_app.callback()
def main_callback(
    ctx: typer.Context,
    debug: Annotated[bool, Option("--debug", help="Enable debug logging. [env: DEBUG]")] = False,
) -> None:
    """Relay trusted blocks from a writer node to a reader node."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


def handle_stop_signal(stop_event: asyncio.Event, task: "asyncio.Task[Any] | None") -> None:
    """Ask the relay to stop on the first signal and cancel it outright on the next.

    The first signal lets continuous mode finish the block in flight. A call
    blocked on a peer that never answers only ends through cancellation.
    """
    if stop_event.is_set():
        logger.warning("Stop signal received again, cancelling relay")
        if task is not None:
            task.cancel()
        return
    logger.info("Stop signal received, finishing current block")
    stop_event.set()


async def run_until_signalled(config: RelayConfig) -> RelayResult:
    """Run the relay with SIGINT and SIGTERM wired to a clean stop, then to cancellation."""
    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    task = asyncio.current_task()
    for signum in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(signum, handle_stop_signal, stop_event, task)
    try:
        return await run_relay_workflow(config, stop_event=stop_event, report=typer.echo)
    finally:
        for signum in (signal.SIGINT, signal.SIGTERM):
            loop.remove_signal_handler(signum)


@typer_app.command(name="start")
def start_cli(
    ctx: typer.Context,
    writer_ap: Annotated[
        str | None,
        Option("--writer-ap", "--writer_ap", help="Writer (trusted source) RPC endpoint. [env: WRITER_AP, default: http://127.0.0.1:8545]"),
    ] = None,
    reader_ap: Annotated[
        str | None,
        Option("--reader-ap", "--reader_ap", help="Reader (sync target) RPC endpoint. [env: READER_AP, default: http://127.0.0.1:8645]"),
    ] = None,
    target: Annotated[
        int | None,
        Option("--target", min=0, help="Sync the reader up to this height, 0 means unset. [env: TARGET]"),
    ] = None,
    single_block: Annotated[
        int | None,
        Option("--single-block", "--single_block", min=0, help="Import only this block, 0 means unset. [env: SINGLE_BLOCK]"),
    ] = None,
    safety_margin: Annotated[
        int | None,
        Option("--safety-margin", min=0, help="Blocks to stay behind the writer in continuous mode. [env: SAFETY_MARGIN, default: 256]"),
    ] = None,
    poll_interval: Annotated[
        float | None,
        Option("--poll-interval", min=0.0, help="Seconds between writer height checks in continuous mode. [env: POLL_INTERVAL, default: 1.0]"),
    ] = None,
) -> None:
    """Start relaying blocks.

    With --single-block only that block is imported. With --target the reader
    is synced up to that height. With neither, the reader follows the writer
    forever, staying --safety-margin blocks behind it.
    """
    ctx.ensure_object(dict)
    settings = Settings()
    debug = True if ctx.obj.get("debug") else None
    configure_logging(debug=debug if debug is not None else settings.DEBUG)

    try:
        config = reconcile_relay_configuration(
            cli_writer_ap=writer_ap,
            cli_reader_ap=reader_ap,
            cli_target=target,
            cli_single_block=single_block,
            cli_safety_margin=safety_margin,
            cli_poll_interval=poll_interval,
            cli_debug=debug,
            settings=settings,
        )
    except (InvalidEndpointError, InvalidSyncSettingError) as exc:
        typer.echo(str(exc), err=True)
        sys.exit(1)

    try:
        result = asyncio.run(run_until_signalled(config))
    except (RelayerError, InvalidSyncSettingError) as exc:
        logger.error("Relay aborted", error=str(exc), error_type=type(exc).__name__)
        typer.echo(str(exc), err=True)
        sys.exit(1)
    except asyncio.CancelledError:
        typer.echo("Relay interrupted before the current block finished.", err=True)
        sys.exit(130)

    logger.info("Relay finished", mode=result.mode.value, blocks_imported=result.blocks_imported, reader_height=result.reader_height)


if __name__ == "__main__":
    typer_app()
