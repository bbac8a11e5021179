"""HTTP message types and the AnyIO listener that drives a Router."""

from .message import Handler, HttpRequest, HttpResponse, ResponseWriter
from .server import HttpServer

__all__ = [
    "Handler",
    "HttpRequest",
    "HttpResponse",
    "HttpServer",
    "ResponseWriter",
]
