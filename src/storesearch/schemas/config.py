"""
Defines structured configuration models using dataclasses.
"""

from dataclasses import dataclass, field


@dataclass
class SessionConfig:
    """Configuration for HTTP session behavior.

    Attributes:
        timeout: Request timeout in seconds.
        max_connections: Maximum number of concurrent connections.
        user_agent: Custom User-Agent string.
        headers: Headers replacing the default request headers.
        verify_ssl: Whether to verify SSL certificates.
        http2: Whether HTTP/2 should be used. (`httpx`, needs `h2`)
        trust_env: Whether environment variables are used for proxies.
        proxy: Proxy server URL.
        proxy_user: Proxy authentication username.
        proxy_pass: Proxy authentication password.
    """

    timeout: float = 10.0
    max_connections: int = 4
    user_agent: str | None = None
    headers: dict[str, str] | None = None
    verify_ssl: bool = True
    http2: bool = False
    trust_env: bool = False
    proxy: str | None = None
    proxy_user: str | None = None
    proxy_pass: str | None = None


@dataclass
class SearchConfig:
    """Configuration for the catalog search pipeline.

    Attributes:
        base_url: Root URL of the catalog API; ``/search`` is appended.
        result_limit: Value of the ``limit`` query parameter.
        backend: HTTP backend name (aiohttp, httpx).
        session_cfg: HTTP session configuration.
    """

    base_url: str = "https://itunes.apple.com"
    result_limit: int = 200
    backend: str = "aiohttp"
    session_cfg: SessionConfig = field(default_factory=SessionConfig)
