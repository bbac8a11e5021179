"""Route table: registered routes keyed by method and route key.

A path without placeholders is stored under its literal text and found by
exact lookup. A path with ``{name}`` placeholders is compiled into an
anchored pattern key, for example::

    "/users/{id}"  ->  "^/users/([a-z0-9-_]+)$"

Pattern entries keep their registration order, which is the order the
router tries them in.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Mapping

from ..errors import RouteError
from ..http.message import Handler
from ..methods import HttpMethod

PARAM_PATTERN = "([a-z0-9-_]+)"

_REGEX_META = re.compile(r"([.^$*+?()\[\]{}|\\])")


def _escape_literal(text: str) -> str:
    """Escape regex metacharacters; '-' and '/' are left as written."""
    return _REGEX_META.sub(r"\\\1", text)


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """A registered route.

    ``params`` maps the zero-based segment index of each placeholder to
    its name; ``names`` lists the placeholder names in capture order.
    """

    path: str
    key: str
    handler: Handler
    params: Mapping[int, str] = field(default_factory=dict)
    names: tuple[str, ...] = ()
    pattern: re.Pattern[str] | None = None

    @property
    def is_pattern(self) -> bool:
        return self.pattern is not None


@dataclass(frozen=True, slots=True)
class _Placeholder:
    start: int
    end: int
    depth: int
    name: str


def _scan_placeholders(path: str) -> list[_Placeholder]:
    found: list[_Placeholder] = []
    depth = -1
    opened_at: int | None = None

    for i, c in enumerate(path):
        if c == "/":
            depth += 1
        elif c == "{":
            if opened_at is not None:
                raise RouteError(f"nested '{{' at offset {i} in route {path!r}")
            opened_at = i
        elif c == "}":
            if opened_at is None:
                raise RouteError(f"unmatched '}}' at offset {i} in route {path!r}")
            found.append(_Placeholder(opened_at, i, depth, path[opened_at + 1 : i]))
            opened_at = None

    if opened_at is not None:
        raise RouteError(f"unclosed '{{' at offset {opened_at} in route {path!r}")
    return found


def compile_route(path: str, handler: Handler) -> RouteEntry:
    """Build the RouteEntry for *path*, literal or pattern."""
    placeholders = _scan_placeholders(path)
    if not placeholders:
        return RouteEntry(path=path, key=path, handler=handler)

    parts = ["^"]
    last = 0
    for ph in placeholders:
        parts.append(_escape_literal(path[last : ph.start]))
        parts.append(PARAM_PATTERN)
        last = ph.end + 1
    parts.append(_escape_literal(path[last:]))
    parts.append("$")
    key = "".join(parts)

    return RouteEntry(
        path=path,
        key=key,
        handler=handler,
        params={ph.depth: ph.name for ph in placeholders},
        names=tuple(ph.name for ph in placeholders),
        pattern=re.compile(key, re.IGNORECASE | re.ASCII),
    )


class RouteTable:
    """Mapping of method -> route key -> RouteEntry.

    Routes are registered during setup, before the server accepts
    traffic. The table is not locked; registering while requests are
    being dispatched is unsupported.
    """

    def __init__(self, logger: logging.Logger | None = None):
        self._routes: dict[HttpMethod, dict[str, RouteEntry]] = {}
        self._log = logger or logging.getLogger(__name__)

    def register(self, method: HttpMethod | str, path: str, handler: Handler) -> RouteEntry:
        """Register *handler* for *method* and *path*.

        Re-registering an existing key replaces its handler.
        Raises RouteError for an unknown method, a path not starting with
        ``/`` or unbalanced braces.
        """
        verb = HttpMethod.parse(method)
        if verb is None:
            raise RouteError(f"unknown HTTP method {method!r}")
        if not isinstance(path, str) or not path.startswith("/"):
            raise RouteError(f"route path must start with '/', got {path!r}")
        if not callable(handler):
            raise RouteError(f"handler for {verb} {path} is not callable")

        entry = compile_route(path, handler)
        self._routes.setdefault(verb, {})[entry.key] = entry
        self._log.debug("Registered route %s %s as %r", verb, path, entry.key)
        return entry

    def lookup(self, method: HttpMethod, key: str) -> RouteEntry | None:
        return self._routes.get(method, {}).get(key)

    def entries(self, method: HttpMethod) -> Mapping[str, RouteEntry] | None:
        """Entries for *method* in registration order, or None if it has none."""
        return self._routes.get(method)

    def patterns(self, method: HttpMethod) -> list[RouteEntry]:
        return [e for e in self._routes.get(method, {}).values() if e.is_pattern]

    @property
    def routes(self) -> Mapping[HttpMethod, Mapping[str, RouteEntry]]:
        return self._routes

    def __len__(self) -> int:
        return sum(len(keys) for keys in self._routes.values())
