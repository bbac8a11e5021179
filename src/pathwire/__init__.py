"""Minimal HTTP routing: literal and ``{name}`` routes over a tiny AnyIO server."""

import logging

from .config import ServerConfig
from .errors import BadRequest, ConfigurationError, PathwireError, RouteError
from .http import Handler, HttpRequest, HttpResponse, HttpServer, ResponseWriter
from .log import init_logger
from .methods import HttpMethod
from .routing import RouteEntry, RouteMatch, RouteTable, Router, not_found_handler

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Routing
    "HttpMethod",
    "Router",
    "RouteTable",
    "RouteEntry",
    "RouteMatch",
    "not_found_handler",
    # HTTP
    "Handler",
    "HttpRequest",
    "HttpResponse",
    "ResponseWriter",
    "HttpServer",
    # Ambient
    "ServerConfig",
    "init_logger",
    "PathwireError",
    "RouteError",
    "ConfigurationError",
    "BadRequest",
]
