"""Tiny HTTP/1.1 server built on AnyIO that feeds requests to a Router.

Features:
- HTTP/1.1 request line + headers parsing
- Optional Content-Length body (no chunked encoding)
- One request per connection (Connection: close)
- Handlers run in worker threads so a slow handler never stalls the event loop
"""

from __future__ import annotations

import logging
from typing import Any, Mapping
from urllib.parse import unquote

import anyio
import anyio.to_thread
from anyio.abc import SocketAttribute, SocketStream, TaskStatus

from ..config import ServerConfig
from ..errors import BadRequest
from ..routing.router import Router, internal_error_handler
from .message import HeaderMap, HttpRequest, HttpResponse, ResponseWriter


_STATUS_TEXT: dict[int, str] = {
    200: "OK",
    201: "Created",
    204: "No Content",
    301: "Moved Permanently",
    302: "Found",
    304: "Not Modified",
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    413: "Payload Too Large",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


def _status_line(status: int) -> str:
    text = _STATUS_TEXT.get(status, "Unknown")
    return f"HTTP/1.1 {status} {text}\r\n"


def _normalize_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    if not headers:
        return {}
    return {k.lower(): v for k, v in headers.items()}


async def _read_until(stream: SocketStream, marker: bytes, max_bytes: int) -> bytes:
    buf = bytearray()
    while True:
        if len(buf) > max_bytes:
            raise BadRequest("request header too large")
        idx = buf.find(marker)
        if idx != -1:
            return bytes(buf[: idx + len(marker)])
        try:
            chunk = await stream.receive(4096)
        except anyio.EndOfStream:
            return bytes(buf)
        if not chunk:
            return bytes(buf)
        buf.extend(chunk)


def parse_head(block: bytes) -> tuple[str, str, str, HeaderMap]:
    """Split a request head into (method, target, version, headers)."""
    head = block.decode("iso-8859-1")

    lines = head.split("\r\n")
    if not lines or not lines[0]:
        raise BadRequest("missing request line")

    parts = lines[0].split(" ")
    if len(parts) != 3:
        raise BadRequest("invalid request line")
    method, target, version = parts
    if not target.startswith("/"):
        raise BadRequest(f"unsupported request target {target!r}")

    headers: HeaderMap = {}
    for line in lines[1:]:
        if line == "":
            break
        if ":" not in line:
            continue
        k, v = line.split(":", 1)
        headers[k.strip().lower()] = v.strip()
    return method, target, version, headers


def split_target(target: str) -> tuple[str, str]:
    """Return the percent-decoded path and the raw query string of *target*."""
    path, _, query = target.partition("?")
    return unquote(path), query


async def _read_exact(stream: SocketStream, n: int) -> bytes:
    buf = bytearray()
    while len(buf) < n:
        try:
            chunk = await stream.receive(n - len(buf))
        except anyio.EndOfStream:
            break
        if not chunk:
            break
        buf.extend(chunk)
    return bytes(buf)


def render_response(response: HttpResponse) -> bytes:
    headers = _normalize_headers(response.headers)
    body = response.body or b""

    # Default headers
    headers.setdefault("content-length", str(len(body)))
    headers.setdefault("connection", "close")

    start = _status_line(response.status).encode("ascii")
    head = b"".join(f"{k}: {v}\r\n".encode("latin-1") for k, v in headers.items())
    return start + head + b"\r\n" + body


INTERNAL_ERROR_BODY = "500 - Internal server error\n"

# Raised by the stream when the peer resets or closes mid-request.
_DISCONNECTED = (anyio.BrokenResourceError, anyio.ClosedResourceError, anyio.EndOfStream)


def _error_response(status: int, text: str) -> HttpResponse:
    return HttpResponse.text(text, status=status, headers={"content-type": "text/plain"})


class HttpServer:
    """HTTP server owning a Router.

    Usage::

        server = HttpServer(ServerConfig(port=8080))
        server.router.register_route("GET", "/hello", hello)
        server.run()

    Inside an existing event loop use ``await task_group.start(server.serve)``,
    which returns the bound port.
    """

    def __init__(
        self,
        config: ServerConfig | None = None,
        *,
        router: Router | None = None,
        logger: logging.Logger | None = None,
    ):
        self._config = config or ServerConfig()
        self._log = logger or logging.getLogger(__name__)
        self._router = router or Router(logger=self._log)
        # anyio.create_tcp_listener() returns a MultiListener; keep it loosely typed.
        self._listener: Any = None

    @property
    def router(self) -> Router:
        return self._router

    @property
    def config(self) -> ServerConfig:
        return self._config

    async def serve(self, *, task_status: TaskStatus[int] = anyio.TASK_STATUS_IGNORED) -> None:
        """Listen and serve until cancelled. Reports the bound port via *task_status*."""
        self._listener = await anyio.create_tcp_listener(
            local_host=self._config.host, local_port=self._config.port
        )
        port = self._listener.extra(SocketAttribute.local_port)
        self._log.debug("Starting server on address `%s:%d`", self._config.host, port)

        async with self._listener:
            task_status.started(port)
            await self._listener.serve(self._handle_client)

    def run(self) -> None:
        """Blocking entry point; logs and returns if the listener fails."""
        try:
            anyio.run(self.serve)
        except OSError as e:
            self._log.error("Server on %s stopped: %s", self._config.address, e)

    async def _handle_client(self, stream: SocketStream) -> None:
        async with stream:
            try:
                response = await self._handle_request(stream)
            except BadRequest as e:
                response = _error_response(400, f"400 - Bad request: {e}\n")
            except _DISCONNECTED as e:
                self._log.debug("Client disconnected before sending a request: %r", e)
                return
            except Exception:
                self._log.exception("Unexpected error while handling a connection")
                response = _error_response(500, INTERNAL_ERROR_BODY)
            if response is None:
                return

            try:
                data = render_response(response)
            except ValueError:
                # Header values outside latin-1, for example.
                self._log.exception("Could not render %d response", response.status)
                data = render_response(_error_response(500, INTERNAL_ERROR_BODY))

            try:
                await stream.send(data)
            except _DISCONNECTED as e:
                self._log.debug("Client disconnected before the response was sent: %r", e)

    async def _handle_request(self, stream: SocketStream) -> HttpResponse | None:
        header_block = await _read_until(stream, b"\r\n\r\n", self._config.max_header_bytes)
        if not header_block:
            return None

        method, target, version, headers = parse_head(header_block)
        try:
            content_length = int(headers.get("content-length", "0") or "0")
        except ValueError:
            raise BadRequest("invalid content-length") from None
        if content_length < 0:
            raise BadRequest("invalid content-length")
        if content_length > self._config.max_body_bytes:
            return _error_response(413, "413 - Payload too large\n")

        body = b""
        if content_length:
            body = await _read_exact(stream, content_length)

        path, query = split_target(target)
        req = HttpRequest(
            method=method,
            path=path,
            version=version,
            headers=headers,
            body=body,
            query=query,
        )

        rw = ResponseWriter()
        try:
            await anyio.to_thread.run_sync(self._router.serve_http, rw, req)
        except Exception:
            self._log.exception("Handler failed for %s %s", req.method, req.path)
            rw = ResponseWriter()
            internal_error_handler(rw, req)
        return rw.to_response()
