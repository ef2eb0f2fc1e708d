"""Contains results of relay runs."""

from block_relayer.configuration.models import SyncMode


class RelayResult:
    """Contains results of a single relay run."""

    def __init__(self, mode: SyncMode, blocks_imported: int, reader_height: int | None = None, target: int | None = None) -> None:
        """Initialize the result with the mode, import count, and where the reader ended up."""
        self.mode = mode
        self.blocks_imported = blocks_imported
        self.reader_height = reader_height
        self.target = target

    def __repr__(self) -> str:
        return f"RelayResult(mode={self.mode.value}, blocks_imported={self.blocks_imported}, reader_height={self.reader_height}, target={self.target})"
