"""Routing: route table plus exact-first, pattern-fallback dispatch."""

from .router import RouteMatch, Router, internal_error_handler, not_found_handler
from .table import RouteEntry, RouteTable, compile_route

__all__ = [
    "RouteEntry",
    "RouteMatch",
    "RouteTable",
    "Router",
    "compile_route",
    "internal_error_handler",
    "not_found_handler",
]
