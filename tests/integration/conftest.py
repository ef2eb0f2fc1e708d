"""Pytest configuration for integration tests.

Integration tests run the real CLI in a subprocess against small in-process
HTTP servers that answer the JSON-RPC calls a writer or reader node would.
"""

import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Callable, Generator

import pytest


class FakeNodeServer:
    """A node answering eth_blockNumber and the trusted block extension."""

    def __init__(self, height: int) -> None:
        self.height = height
        self.imported: list[str] = []
        self.lock = threading.Lock()
        node = self

        class Handler(BaseHTTPRequestHandler):
            def do_POST(self) -> None:
                length = int(self.headers.get("Content-Length", 0))
                request = json.loads(self.rfile.read(length))
                body = json.dumps(node.handle(request)).encode()
                self.send_response(200)
                self.send_header("Content-Type", "application/json")
                self.send_header("Content-Length", str(len(body)))
                self.end_headers()
                self.wfile.write(body)

            def log_message(self, format: str, *args: Any) -> None:
                pass

        self.server = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
        self.thread = threading.Thread(target=self.server.serve_forever, daemon=True)

    @property
    def url(self) -> str:
        host, port = self.server.server_address[:2]
        return f"http://{host}:{port}"

    def handle(self, request: dict[str, Any]) -> dict[str, Any]:
        response: dict[str, Any] = {"jsonrpc": "2.0", "id": request.get("id")}
        method = request.get("method")
        params = request.get("params") or []
        with self.lock:
            if method == "eth_blockNumber":
                response["result"] = hex(self.height)
            elif method == "admin_retrieveTrustedBlock":
                by_hash, key = params[1], params[2]
                if not by_hash and key > self.height:
                    response["error"] = {"code": -32000, "message": f"block {key} not found"}
                else:
                    response["result"] = f"0xf9{key:06x}" if not by_hash else f"0xf9{key[2:10]}"
            elif method == "admin_importTrustedBlock":
                self.imported.append(params[0])
                response["result"] = None
            else:
                response["error"] = {"code": -32601, "message": f"the method {method} does not exist/is not available"}
        return response

    def start(self) -> None:
        self.thread.start()

    def stop(self) -> None:
        self.server.shutdown()
        self.server.server_close()


@pytest.fixture
def fake_node() -> Generator[Callable[[int], FakeNodeServer], None, None]:
    """Start fake nodes at a given height and shut them all down afterwards."""
    servers: list[FakeNodeServer] = []

    def factory(height: int) -> FakeNodeServer:
        server = FakeNodeServer(height)
        server.start()
        servers.append(server)
        return server

    yield factory
    for server in servers:
        server.stop()
