"""Fixtures for unit tests."""

import asyncio
from types import TracebackType
from typing import Any, Callable, Generator

import pytest
import structlog

from block_relayer.rpc.abc import TrustedBlockClientBase
from block_relayer.rpc.models import BlockHandle


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


class FakeNode(TrustedBlockClientBase):
    """In-memory stand-in for a node speaking the trusted block extension.

    Every raw call, retrieval and import is appended to ``log`` as ``(kind, value)`` so
    tests can assert on ordering across a writer and a reader sharing one log.
    """

    def __init__(
        self,
        endpoint: str,
        log: list[tuple[str, Any]],
        fail_on: int | None = None,
        error: Exception | None = None,
        results: dict[str, Any] | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.log = log
        self.results = results or {}
        self.fail_on = fail_on
        self.error = error
        self.imported: list[BlockHandle] = []
        self.closed = False

    async def call(self, method: str, params: list[Any]) -> Any:
        self.log.append(("call", (method, params)))
        return self.results.get(method)

    async def retrieve_trusted_block_by_number(self, block_number: int) -> BlockHandle:
        if self.fail_on is not None and block_number == self.fail_on and self.error is not None:
            raise self.error
        self.log.append(("fetch", block_number))
        return BlockHandle(f"0xf9{block_number:06x}")

    async def retrieve_trusted_block_by_hash(self, block_hash: str) -> BlockHandle:
        self.log.append(("fetch_hash", block_hash))
        return BlockHandle(f"0xf9{block_hash}")

    async def import_trusted_block(self, block: BlockHandle) -> None:
        self.log.append(("import", block))
        self.imported.append(block)

    async def close(self) -> None:
        self.closed = True

    async def __aenter__(self) -> "FakeNode":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.close()


class FakeHeights:
    """Height reader returning scripted heights per endpoint.

    Each endpoint maps to a list of heights handed out in order. Once a list
    is down to its last value that value keeps being returned. A list scripted
    with more than one height sets the stop event, if one was given, when it
    is queried past its end, so continuous runs end once the writer script
    has been played out. Single-height lists never stop the run.
    """

    def __init__(self, heights: dict[str, list[int]], stop_event: asyncio.Event | None = None) -> None:
        self.heights = {endpoint: list(values) for endpoint, values in heights.items()}
        self.stops_when_drained = {endpoint for endpoint, values in heights.items() if len(values) > 1}
        self.stop_event = stop_event
        self.queries: list[str] = []

    async def __call__(self, endpoint: str) -> int:
        self.queries.append(endpoint)
        values = self.heights[endpoint]
        if len(values) > 1:
            return values.pop(0)
        if self.stop_event is not None and endpoint in self.stops_when_drained:
            self.stop_event.set()
        return values[0]


@pytest.fixture
def call_log() -> list[tuple[str, Any]]:
    """Shared ordered log of fetches and imports."""
    return []


@pytest.fixture
def fake_node_factory(call_log: list[tuple[str, Any]]) -> Callable[..., FakeNode]:
    """Build fake nodes that write into the shared call log."""

    def factory(endpoint: str, fail_on: int | None = None, error: Exception | None = None, results: dict[str, Any] | None = None) -> FakeNode:
        return FakeNode(endpoint, call_log, fail_on=fail_on, error=error, results=results)

    return factory


@pytest.fixture
def fake_heights_factory() -> Callable[..., FakeHeights]:
    """Build scripted height readers."""

    def factory(heights: dict[str, list[int]], stop_event: asyncio.Event | None = None) -> FakeHeights:
        return FakeHeights(heights, stop_event=stop_event)

    return factory
