"""Server configuration.

ServerConfig is a frozen dataclass: immutable after creation and checked
once in ``__post_init__``.
"""

from dataclasses import dataclass

from .errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Listener settings for HttpServer.

    Override what you need::

        config = ServerConfig(host="0.0.0.0", port=9000)

    ``port=0`` asks the OS for a free port; ``HttpServer.serve`` reports
    the bound port through its task status.
    """

    host: str = "127.0.0.1"
    port: int = 8080

    # Request limits
    max_header_bytes: int = 64 * 1024
    max_body_bytes: int = 1 * 1024 * 1024

    def __post_init__(self):
        if not 0 <= self.port <= 65535:
            raise ConfigurationError(f"port must be in 0..65535, got {self.port}")
        if self.max_header_bytes <= 0:
            raise ConfigurationError("max_header_bytes must be positive")
        if self.max_body_bytes <= 0:
            raise ConfigurationError("max_body_bytes must be positive")

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"
