"""
Cancelable HTTP fetching for the search pipeline.

:class:`StoreFetcher` owns the HTTP session and starts each GET as an
:class:`asyncio.Task`. The returned :class:`FetchHandle` reports exactly one
:class:`FetchOutcome` per request, tagged ``cancelled`` when the request was
cancelled before it finished.
"""

from __future__ import annotations

import asyncio
import logging
import types
from collections.abc import Callable, Generator
from dataclasses import dataclass
from typing import Any, Self

from storesearch.infra.http_defaults import ACCEPT_IMAGE
from storesearch.infra.sessions import BaseResponse, BaseSession, create_session
from storesearch.schemas import SearchConfig, SearchResult

from .errors import TransportFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FetchOutcome:
    """Result of one fetch.

    Attributes:
        url: Requested URL.
        content: Response body, or None if no response was received.
        status: HTTP status code, or None if no response was received.
        error: Transport error raised by the backend, if any.
        cancelled: True if the fetch was cancelled before completing.
    """

    url: str
    content: bytes | None = None
    status: int | None = None
    error: BaseException | None = None
    cancelled: bool = False

    @property
    def ok(self) -> bool:
        return not self.cancelled and self.error is None and self.status == 200


class FetchHandle:
    """Handle of an in-flight fetch.

    The handle can be cancelled, awaited for its :class:`FetchOutcome`, or
    given callbacks that receive the outcome once the fetch finishes.
    """

    def __init__(self, url: str, task: asyncio.Task[BaseResponse]) -> None:
        self.url = url
        self._task = task
        task.add_done_callback(self._log_outcome)

    @property
    def done(self) -> bool:
        return self._task.done()

    @property
    def cancelled(self) -> bool:
        return self._task.cancelled()

    def cancel(self) -> bool:
        """Request cancellation.

        Returns:
            False if the fetch has already finished, otherwise True.
        """
        return self._task.cancel()

    def outcome(self) -> FetchOutcome:
        """Return the outcome of a finished fetch.

        Raises:
            asyncio.InvalidStateError: If the fetch is still running.
        """
        task = self._task
        if not task.done():
            raise asyncio.InvalidStateError(f"Fetch of {self.url} is still running")
        if task.cancelled():
            return FetchOutcome(url=self.url, cancelled=True)

        exc = task.exception()
        if exc is not None:
            return FetchOutcome(url=self.url, error=exc)

        resp = task.result()
        return FetchOutcome(url=self.url, content=resp.content, status=resp.status)

    def add_done_callback(self, callback: Callable[[FetchOutcome], None]) -> None:
        """Call ``callback`` with the outcome once the fetch finishes.

        The callback runs on the event loop, exactly once.
        """
        self._task.add_done_callback(lambda _: callback(self.outcome()))

    def __await__(self) -> Generator[Any, None, FetchOutcome]:
        return self._wait().__await__()

    async def _wait(self) -> FetchOutcome:
        await asyncio.wait([self._task])
        return self.outcome()

    def _log_outcome(self, task: asyncio.Task[BaseResponse]) -> None:
        if task.cancelled():
            logger.debug("Fetch cancelled: %s", self.url)
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Fetch failed: %s (%s: %s)", self.url, type(exc).__name__, exc)
        else:
            logger.debug("Fetched %s [%d]", self.url, task.result().status)

    def __repr__(self) -> str:
        state = "done" if self.done else "pending"
        return f"<FetchHandle {state} url={self.url!r}>"


class StoreFetcher:
    """HTTP fetch adapter used by the search session.

    ``StoreFetcher`` owns one :class:`BaseSession` and exposes cancelable
    fetches plus a plain awaitable download for binary resources such as
    artwork.
    """

    def __init__(
        self,
        config: SearchConfig | None = None,
        *,
        session: BaseSession | None = None,
        **kwargs: Any,
    ) -> None:
        """Initializes a new fetcher instance.

        Args:
            config: Optional search configuration; selects the backend and
                its session settings.
            session: Optional preconfigured HTTP session. If omitted, a new
                session is created via :func:`create_session`.
            **kwargs: Additional keyword arguments forwarded to
                :func:`create_session` when ``session`` is not provided.
        """
        config = config or SearchConfig()
        self.session = session or create_session(
            backend=config.backend,
            cfg=config.session_cfg,
            **kwargs,
        )

    async def init(self) -> None:
        await self.session.init()

    async def close(self) -> None:
        await self.session.close()

    def fetch(self, url: str, **kwargs: Any) -> FetchHandle:
        """Start a GET request in the background.

        Must be called from a running event loop.

        Args:
            url: Target URL.
            **kwargs: Additional parameters forwarded to ``BaseSession.get``.

        Returns:
            A handle reporting the request's outcome.

        Raises:
            RuntimeError: If the session is not initialized or no event loop
                is running.
        """
        if not self.session.is_open:
            raise RuntimeError("Fetcher is not initialized or has been shut down.")

        loop = asyncio.get_running_loop()
        task = loop.create_task(self.session.get(url, **kwargs), name=f"fetch {url}")
        logger.debug("Fetching %s", url)
        return FetchHandle(url, task)

    def fetch_artwork(self, result: SearchResult, *, large: bool = False) -> FetchHandle:
        """Start downloading a result's artwork.

        Args:
            result: Result whose artwork is requested.
            large: Fetch the detail-size artwork instead of the thumbnail.
        """
        url = result.artwork_large_url if large else result.artwork_small_url
        return self.fetch(url, headers={"Accept": ACCEPT_IMAGE})

    async def fetch_binary(self, url: str, **kwargs: Any) -> bytes:
        """Download ``url`` and return the body.

        Raises:
            TransportFailure: If the server answers with an error status.
        """
        resp = await self.session.get(url, **kwargs)
        if not resp.ok:
            raise TransportFailure(
                f"Request to {url} failed with status {resp.status}",
                url=url,
                status=resp.status,
            )
        return resp.content

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
