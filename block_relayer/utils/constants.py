"""Shared constants used across the application."""

# JSON-RPC Method Names
# ---------------------

RETRIEVE_TRUSTED_BLOCK_METHOD = "admin_retrieveTrustedBlock"
"""Writer-side method returning a serialized trusted block."""

IMPORT_TRUSTED_BLOCK_METHOD = "admin_importTrustedBlock"
"""Reader-side method accepting a serialized trusted block."""

# Endpoint Defaults
# -----------------

DEFAULT_WRITER_AP = "http://127.0.0.1:8545"
"""Default RPC endpoint of the trusted writer node."""

DEFAULT_READER_AP = "http://127.0.0.1:8645"
"""Default RPC endpoint of the reader node being synced."""

# Sync Loop Settings
# ------------------

DEFAULT_SAFETY_MARGIN = 256
"""Number of blocks the reader stays behind the writer in continuous mode."""

DEFAULT_POLL_INTERVAL = 1.0
"""Seconds to wait between writer height re-checks in continuous mode."""
