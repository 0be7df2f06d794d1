from __future__ import annotations

import abc
import types
from collections.abc import Mapping, Sequence
from typing import Any, Self, TypedDict, Unpack

from storesearch.infra.http_defaults import DEFAULT_USER_HEADERS
from storesearch.schemas import SessionConfig

from .response import BaseResponse


class GetRequestKwargs(TypedDict, total=False):
    headers: Mapping[str, str] | Sequence[tuple[str, str]]
    params: dict[str, Any] | list[tuple[str, Any]] | None


class BaseSession(abc.ABC):
    """Asynchronous HTTP session shared by every request of a fetcher.

    Subclasses wrap one HTTP client library. The underlying client is created
    lazily by :meth:`init` and released by :meth:`close`; both are
    idempotent.
    """

    def __init__(self, cfg: SessionConfig | None = None, **kwargs: Any) -> None:
        """Initializes the session using the provided configuration.

        Args:
            cfg: Optional configuration object defining session behavior.
            **kwargs: Additional parameters reserved for backend-specific
                initialization.
        """
        cfg = cfg or SessionConfig()

        self._timeout = cfg.timeout
        self._max_connections = cfg.max_connections
        self._verify_ssl = cfg.verify_ssl
        self._http2 = cfg.http2
        self._proxy = cfg.proxy
        self._proxy_user = cfg.proxy_user
        self._proxy_pass = cfg.proxy_pass
        self._trust_env = cfg.trust_env
        self._session: Any = None

        self._headers = (
            cfg.headers.copy()
            if cfg.headers is not None
            else DEFAULT_USER_HEADERS.copy()
        )
        if cfg.user_agent:
            self._headers["User-Agent"] = cfg.user_agent

    @abc.abstractmethod
    async def init(self, **kwargs: Any) -> None:
        """Creates the backend client if it is not already open."""
        ...

    @abc.abstractmethod
    async def close(self) -> None:
        """Releases the backend client."""
        ...

    @abc.abstractmethod
    async def get(
        self,
        url: str,
        *,
        allow_redirects: bool | None = None,
        encoding: str = "utf-8",
        **kwargs: Unpack[GetRequestKwargs],
    ) -> BaseResponse:
        """Performs an HTTP GET request.

        Non-success statuses are returned, not raised; transport errors
        propagate as the backend's own exception types.

        Args:
            url: Target URL.
            allow_redirects: Whether redirects should be followed.
            encoding: Fallback text encoding if the server declares none.
            **kwargs: Additional request parameters forwarded to the backend.

        Returns:
            BaseResponse: The fully read response.

        Raises:
            RuntimeError: If the session has not been initialized.
        """
        ...

    @property
    def headers(self) -> dict[str, str]:
        """Returns a copy of the default request headers."""
        return self._headers.copy()

    @property
    def is_open(self) -> bool:
        return self._session is not None

    async def __aenter__(self) -> Self:
        await self.init()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        await self.close()
