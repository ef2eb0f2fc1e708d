"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass
from enum import Enum

from block_relayer.utils.constants import DEFAULT_POLL_INTERVAL, DEFAULT_SAFETY_MARGIN


class SyncMode(str, Enum):
    """Enum for the ways a relay run can operate."""

    SINGLE = "single"
    TARGET = "target"
    CONTINUOUS = "continuous"


@dataclass(frozen=True)
class RelayConfig:
    """Configuration class for the start command."""

    writer_ap: str
    reader_ap: str
    mode: SyncMode
    single_block: int | None = None
    target: int | None = None
    safety_margin: int = DEFAULT_SAFETY_MARGIN
    poll_interval: float = DEFAULT_POLL_INTERVAL
    debug: bool = False
