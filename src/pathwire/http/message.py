"""Request, response and response-writer types shared by router and server."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Mapping


HeaderMap = dict[str, str]


@dataclass(frozen=True, slots=True)
class HttpRequest:
    method: str
    path: str
    version: str = "HTTP/1.1"
    headers: HeaderMap = field(default_factory=dict)
    body: bytes = b""
    query: str = ""
    # Filled in by the router from the matched route's placeholders.
    path_params: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class HttpResponse:
    status: int = 200
    headers: Mapping[str, str] | None = None
    body: bytes = b""

    @staticmethod
    def text(
        text: str,
        *,
        status: int = 200,
        headers: Mapping[str, str] | None = None,
        encoding: str = "utf-8",
    ) -> "HttpResponse":
        body = text.encode(encoding)
        merged: dict[str, str] = {"content-type": f"text/plain; charset={encoding}"}
        if headers:
            merged.update({k.lower(): v for k, v in headers.items()})
        return HttpResponse(status=status, headers=merged, body=body)


class ResponseWriter:
    """Mutable response handed to handlers.

    Handlers set headers, pick a status with :meth:`write_header` and
    append to the body with :meth:`write`. Only the first status counts;
    writing a body without a status implies 200.
    """

    def __init__(self) -> None:
        self.headers: HeaderMap = _HeaderDict()
        self._status: int | None = None
        self._body = bytearray()

    @property
    def status(self) -> int:
        return self._status if self._status is not None else 200

    @property
    def header_written(self) -> bool:
        return self._status is not None

    def write_header(self, status: int) -> None:
        if self._status is None:
            self._status = status

    def write(self, data: str | bytes, encoding: str = "utf-8") -> int:
        if self._status is None:
            self._status = 200
        if isinstance(data, str):
            data = data.encode(encoding)
        self._body.extend(data)
        return len(data)

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    def to_response(self) -> HttpResponse:
        return HttpResponse(status=self.status, headers=dict(self.headers), body=self.body)


class _HeaderDict(dict):
    """dict that lower-cases keys on every access."""

    def __setitem__(self, key: str, value: str) -> None:
        super().__setitem__(key.lower(), value)

    def __getitem__(self, key: str) -> str:
        return super().__getitem__(key.lower())

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and super().__contains__(key.lower())

    def __delitem__(self, key: str) -> None:
        super().__delitem__(key.lower())

    def get(self, key: str, default=None):
        return super().get(key.lower(), default)

    def setdefault(self, key: str, default: str = "") -> str:
        return super().setdefault(key.lower(), default)

    _MISSING = object()

    def pop(self, key: str, default=_MISSING):
        if default is self._MISSING:
            return super().pop(key.lower())
        return super().pop(key.lower(), default)

    def update(self, other=(), /, **kwargs: str) -> None:
        items = other.items() if hasattr(other, "items") else other
        for k, v in items:
            self[k] = v
        for k, v in kwargs.items():
            self[k] = v


Handler = Callable[[ResponseWriter, HttpRequest], None]
