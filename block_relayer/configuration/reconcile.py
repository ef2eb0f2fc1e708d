"""Reconcile relay configuration between CLI arguments and environment variables."""

from urllib.parse import urlparse

import structlog

from block_relayer.configuration.env import Settings
from block_relayer.configuration.exceptions import InvalidEndpointError, InvalidSyncSettingError
from block_relayer.configuration.models import RelayConfig, SyncMode

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def validate_endpoint(value: str, name: str, cli_name: str, env_name: str) -> str:
    """Validates that an endpoint is an HTTP(S) URL with a host.

    Raises:
        InvalidEndpointError: If the endpoint cannot be used for JSON-RPC over HTTP.
    """
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidEndpointError(name=name, cli_name=cli_name, env_name=env_name, value=value)
    return value


def determine_sync_mode(single_block: int | None, target: int | None) -> SyncMode:
    """Pick the sync mode, checking single block first, then target.

    Zero and None both mean the option was not given.
    """
    if single_block:
        if target:
            logger.warning("Both single block and target were given, importing the single block only", single_block=single_block, target=target)
        return SyncMode.SINGLE
    if target:
        return SyncMode.TARGET
    return SyncMode.CONTINUOUS


def reconcile_relay_configuration(
    cli_writer_ap: str | None = None,
    cli_reader_ap: str | None = None,
    cli_target: int | None = None,
    cli_single_block: int | None = None,
    cli_safety_margin: int | None = None,
    cli_poll_interval: float | None = None,
    cli_debug: bool | None = None,
    settings: Settings | None = None,
) -> RelayConfig:
    """Reconciles the start command configuration.

    Values given on the command line win over environment variables and the
    .env file, which win over built-in defaults.

    Args:
        cli_writer_ap (str | None): The writer endpoint from the command line.
        cli_reader_ap (str | None): The reader endpoint from the command line.
        cli_target (int | None): The sync target from the command line.
        cli_single_block (int | None): The single block height from the command line.
        cli_safety_margin (int | None): The continuous mode safety margin from the command line.
        cli_poll_interval (float | None): The continuous mode poll interval from the command line.
        cli_debug (bool | None): The debug flag from the command line.
        settings (Settings | None): Environment settings, loaded when not supplied.

    Raises:
        InvalidEndpointError: If either endpoint is not an HTTP(S) URL.
        InvalidSyncSettingError: If a numeric setting is out of range.

    Returns:
        RelayConfig: The reconciled configuration with an explicit sync mode.
    """
    if settings is None:
        settings = Settings()

    writer_ap = validate_endpoint(
        cli_writer_ap if cli_writer_ap is not None else settings.WRITER_AP,
        name="writer endpoint",
        cli_name="writer_ap",
        env_name="WRITER_AP",
    )
    reader_ap = validate_endpoint(
        cli_reader_ap if cli_reader_ap is not None else settings.READER_AP,
        name="reader endpoint",
        cli_name="reader_ap",
        env_name="READER_AP",
    )
    target = cli_target if cli_target is not None else settings.TARGET
    single_block = cli_single_block if cli_single_block is not None else settings.SINGLE_BLOCK
    safety_margin = cli_safety_margin if cli_safety_margin is not None else settings.SAFETY_MARGIN
    poll_interval = cli_poll_interval if cli_poll_interval is not None else settings.POLL_INTERVAL
    debug = cli_debug if cli_debug is not None else settings.DEBUG

    if target < 0:
        raise InvalidSyncSettingError(f"Target must not be negative, got {target}")
    if single_block < 0:
        raise InvalidSyncSettingError(f"Single block must not be negative, got {single_block}")
    if safety_margin < 0:
        raise InvalidSyncSettingError(f"Safety margin must not be negative, got {safety_margin}")
    if poll_interval < 0:
        raise InvalidSyncSettingError(f"Poll interval must not be negative, got {poll_interval}")

    mode = determine_sync_mode(single_block=single_block, target=target)
    return RelayConfig(
        writer_ap=writer_ap,
        reader_ap=reader_ap,
        mode=mode,
        single_block=single_block if mode == SyncMode.SINGLE else None,
        target=target if mode == SyncMode.TARGET else None,
        safety_margin=safety_margin,
        poll_interval=poll_interval,
        debug=debug,
    )
