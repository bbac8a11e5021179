"""Exception hierarchy shared by the route table, router and server."""


class PathwireError(Exception):
    """Base for all pathwire errors."""


class RouteError(PathwireError, ValueError):
    """Raised when a route registration is malformed.

    Registration happens at startup, so this is a programming error and
    is never turned into an HTTP response.
    """


class ConfigurationError(PathwireError, ValueError):
    """Raised when a ServerConfig holds invalid values."""


class BadRequest(PathwireError, ValueError):  # noqa: N818
    """Raised by the wire parser for a malformed request (answered with 400)."""
