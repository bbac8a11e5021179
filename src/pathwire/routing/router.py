"""Request dispatch: resolve (method, path) to a handler and invoke it.

Resolution order:

1. unknown method, or a method with no routes -> not found
2. exact literal key                           -> that route
3. pattern keys, in registration order         -> first full match
4. otherwise                                   -> not found
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Callable, Mapping

from ..http.message import Handler, HttpRequest, ResponseWriter
from ..methods import HttpMethod
from .table import RouteEntry, RouteTable


def not_found_handler(rw: ResponseWriter, req: HttpRequest) -> None:
    rw.headers["Content-Type"] = "text/plain"
    rw.write_header(404)
    rw.write("404 - Page not found\n")


def internal_error_handler(rw: ResponseWriter, req: HttpRequest) -> None:
    rw.headers["Content-Type"] = "text/plain"
    rw.write_header(500)
    rw.write("500 - Internal server error\n")


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Outcome of resolving a request. ``entry`` is None for the fallbacks."""

    handler: Handler
    entry: RouteEntry | None = None
    path_params: Mapping[str, str] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.entry is not None


_NOT_FOUND = RouteMatch(handler=not_found_handler)
_INTERNAL_ERROR = RouteMatch(handler=internal_error_handler)


class Router:
    """Routes requests to handlers registered per method and path.

    Usage::

        router = Router()
        router.register_route(HttpMethod.GET, "/users/{id}", show_user)
        router.serve_http(rw, request)

    Handlers receive the captured placeholder values in
    ``request.path_params``.
    """

    def __init__(self, logger: logging.Logger | None = None):
        self._log = logger or logging.getLogger(__name__)
        self._table = RouteTable(logger=self._log)

    # ----- registration -----

    def register_route(self, method: HttpMethod | str, path: str, handler: Handler) -> None:
        self._table.register(method, path, handler)

    def route(self, method: HttpMethod | str, path: str) -> Callable[[Handler], Handler]:
        """Decorator form of :meth:`register_route`."""
        def decorator(handler: Handler) -> Handler:
            self.register_route(method, path, handler)
            return handler
        return decorator

    def registered_routes(self) -> Mapping[HttpMethod, Mapping[str, RouteEntry]]:
        return self._table.routes

    @property
    def table(self) -> RouteTable:
        return self._table

    # ----- matching -----

    def match(self, method: HttpMethod | str, path: str) -> RouteMatch:
        verb = HttpMethod.parse(method)
        if verb is None or not self._table.entries(verb):
            return _NOT_FOUND

        entry = self._table.lookup(verb, path)
        if entry is not None and not entry.is_pattern:
            return RouteMatch(handler=entry.handler, entry=entry)

        for entry in self._table.patterns(verb):
            m = entry.pattern.fullmatch(path)
            if m is not None:
                return RouteMatch(
                    handler=entry.handler,
                    entry=entry,
                    path_params=dict(zip(entry.names, m.groups())),
                )

        return _NOT_FOUND

    def resolve(self, method: HttpMethod | str, path: str) -> Handler:
        return self.match(method, path).handler

    # ----- dispatch -----

    def serve_http(self, rw: ResponseWriter, req: HttpRequest) -> None:
        """Resolve *req* and run its handler, writing into *rw*.

        A failure while resolving answers this request with 500; a failure
        raised by the handler itself propagates to the caller.
        """
        self._log.debug("Received request: %s %s", req.method, req.path)
        try:
            result = self.match(req.method, req.path)
        except Exception:
            self._log.exception("Route resolution failed for %s %s", req.method, req.path)
            result = _INTERNAL_ERROR

        if result.path_params:
            req = dataclasses.replace(req, path_params=result.path_params)
        result.handler(rw, req)
