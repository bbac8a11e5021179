"""HTTP request methods understood by the router."""

from __future__ import annotations

from enum import Enum


class HttpMethod(str, Enum):
    """The standard HTTP verbs.

    Members compare equal to their string value, so ``HttpMethod.GET == "GET"``.
    """
    GET = "GET"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    PUT = "PUT"
    DELETE = "DELETE"
    POST = "POST"
    PATCH = "PATCH"
    CONNECT = "CONNECT"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str | HttpMethod) -> HttpMethod | None:
        """Return the member for *value* (case-insensitive), or None if unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value.upper())
        except (ValueError, AttributeError):
            return None
