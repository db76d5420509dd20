"""
Shared fixtures for the unifi_client tests.

Provides:
- controller: a stub UniFi Controller served over HTTP on localhost
- load_fixture: wire objects from tests/fixtures
"""

import json
import threading
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest

JSON_CONTENT_TYPE = "application/json;charset=UTF-8"


@dataclass
class RecordedRequest:
    method: str
    path: str
    headers: Dict[str, str]
    body: bytes

    def json(self) -> Any:
        return json.loads(self.body)


@dataclass
class StubResponse:
    status: int = 200
    body: bytes = b""
    content_type: Optional[str] = JSON_CONTENT_TYPE
    headers: List[Tuple[str, str]] = field(default_factory=list)


class StubController:
    """Replies to requests with queued responses and records every request."""

    def __init__(self):
        self.url = ""
        self.requests: List[RecordedRequest] = []
        self._responses: List[StubResponse] = []
        self._lock = threading.Lock()

    def respond(self, status=200, body=b"", content_type=JSON_CONTENT_TYPE, headers=None):
        if isinstance(body, str):
            body = body.encode("utf-8")
        with self._lock:
            self._responses.append(
                StubResponse(status, body, content_type, list(headers or []))
            )

    def respond_json(self, payload, status=200, headers=None):
        self.respond(status, json.dumps(payload), headers=headers)

    def respond_data(self, rows, headers=None):
        self.respond_json({"meta": {"rc": "ok"}, "data": rows}, headers=headers)

    def next_response(self) -> StubResponse:
        with self._lock:
            if not self._responses:
                return StubResponse(404, b"no response queued", "text/plain")
            return self._responses.pop(0)


@pytest.fixture
def controller():
    """Start a stub controller on a free localhost port."""
    stub = StubController()

    class Handler(BaseHTTPRequestHandler):
        def _handle(self):
            length = int(self.headers.get("Content-Length") or 0)
            body = self.rfile.read(length) if length else b""
            stub.requests.append(
                RecordedRequest(self.command, self.path, dict(self.headers), body)
            )

            response = stub.next_response()
            self.send_response(response.status)
            if response.content_type is not None:
                self.send_header("Content-Type", response.content_type)
            for name, value in response.headers:
                self.send_header(name, value)
            self.send_header("Content-Length", str(len(response.body)))
            self.end_headers()
            self.wfile.write(response.body)

        do_GET = _handle
        do_POST = _handle

        def log_message(self, format, *args):
            pass

    server = HTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    stub.url = f"http://127.0.0.1:{server.server_address[1]}"

    yield stub

    server.shutdown()
    server.server_close()
    thread.join()


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def load_fixture(fixtures_dir):
    """Load a wire object from tests/fixtures by file name."""
    def _load(filename: str) -> Dict[str, Any]:
        with open(fixtures_dir / filename, encoding="utf-8") as f:
            return json.load(f)

    return _load
