from __future__ import annotations

from typing import Any

from storesearch.infra.sessions import SUPPORTED_BACKENDS
from storesearch.schemas import SearchConfig, SessionConfig

DEFAULT_BACKEND = "aiohttp"


class ConfigAdapter:
    """High-level accessor for the loaded settings mapping.

    Values are read from the ``general`` table and fall back to built-in
    defaults when a key is missing.

    Args:
        config (dict[str, Any]): Loaded configuration mapping, usually the
            result of :func:`load_config`.
    """

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        self._config: dict[str, Any] = dict(config or {})

    def get_config(self) -> dict[str, Any]:
        return self._config

    def get_search_config(self) -> SearchConfig:
        """Build the SearchConfig for the search pipeline.

        Returns:
            SearchConfig: Resolved search configuration.

        Raises:
            ValueError: If the configured backend is not supported.
        """
        cfg = self._gen_cfg()
        base_url = str(cfg.get("base_url", SearchConfig.base_url)).rstrip("/")

        return SearchConfig(
            base_url=base_url,
            result_limit=int(cfg.get("result_limit", 200)),
            backend=self.get_backend(),
            session_cfg=self.get_session_config(),
        )

    def get_session_config(self) -> SessionConfig:
        """Build the SessionConfig for the HTTP backend.

        Returns:
            SessionConfig: Resolved session configuration.
        """
        cfg = self._gen_cfg()

        return SessionConfig(
            timeout=float(cfg.get("timeout", 10.0)),
            max_connections=int(cfg.get("max_connections", 4)),
            user_agent=cfg.get("user_agent"),
            headers=cfg.get("headers"),
            verify_ssl=bool(cfg.get("verify_ssl", True)),
            http2=bool(cfg.get("http2", False)),
            trust_env=bool(cfg.get("trust_env", False)),
            proxy=cfg.get("proxy") or None,
            proxy_user=cfg.get("proxy_user") or None,
            proxy_pass=cfg.get("proxy_pass") or None,
        )

    def get_backend(self) -> str:
        """Return the backend name, or ``"aiohttp"`` if unspecified.

        Raises:
            ValueError: If the configured backend is not supported.
        """
        backend = self._gen_cfg().get("backend")
        if not isinstance(backend, str) or not backend:
            return DEFAULT_BACKEND
        if backend not in SUPPORTED_BACKENDS:
            raise ValueError(f"Unsupported backend in settings: {backend!r}")
        return backend

    def _gen_cfg(self) -> dict[str, Any]:
        general = self._config.get("general")
        return general if isinstance(general, dict) else {}
