"""
Search session: the orchestrator between user input and rendered results.

A :class:`SearchSession` turns ``(text, category)`` into a catalog request,
keeps at most one request in flight, and moves through the states in
:mod:`storesearch.schemas.state`. Observers only read the state; every
transition happens on the event loop thread, inside the session.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from urllib.parse import quote

from storesearch.schemas import (
    Category,
    Loading,
    NoResults,
    NotSearchedYet,
    Results,
    SearchConfig,
    SearchState,
)

from .errors import ParseError, SearchError, TransportFailure
from .fetcher import FetchHandle, FetchOutcome, StoreFetcher
from .parser import ResponseParser
from .ranking import sort_results

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[bool], None]
StateObserver = Callable[[SearchState], None]


class SearchSession:
    """Runs catalog searches with "latest wins" semantics.

    Starting a search cancels the previous one. A superseded search never
    changes the state and never calls its completion callback, even if its
    response arrives after cancellation was requested.
    """

    def __init__(
        self,
        fetcher: StoreFetcher,
        config: SearchConfig | None = None,
        parser: ResponseParser | None = None,
    ) -> None:
        config = config or SearchConfig()

        self._fetcher = fetcher
        self._parser = parser or ResponseParser()
        self._base_url = config.base_url.rstrip("/")
        self._result_limit = config.result_limit

        self._state: SearchState = NotSearchedYet()
        self._handle: FetchHandle | None = None
        self._generation = 0
        self._last_error: SearchError | None = None
        self._observers: list[StateObserver] = []

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return isinstance(self._state, Loading)

    @property
    def last_error(self) -> SearchError | None:
        """Error behind the most recent failed search, if any."""
        return self._last_error

    def add_observer(self, observer: StateObserver) -> None:
        """Register a callable that receives the state after each transition.

        An observer that raises is logged and does not stop the session.
        """
        self._observers.append(observer)

    def remove_observer(self, observer: StateObserver) -> None:
        self._observers.remove(observer)

    def build_url(self, text: str, category: Category) -> str:
        """Build the catalog search URL for ``text`` within ``category``.

        The search text is percent-encoded, including reserved characters
        such as ``&``, ``=`` and spaces.
        """
        params = {
            "term": quote(text, safe=""),
            "limit": str(self._result_limit),
            "entity": category.entity,
        }
        query_string = "&".join(f"{k}={v}" for k, v in params.items())
        return f"{self._base_url}/search?{query_string}"

    def perform_search(
        self,
        text: str,
        category: Category,
        on_complete: CompletionCallback | None = None,
    ) -> bool:
        """Start a search and return immediately.

        Must be called from a running event loop. The state is ``Loading``
        when this method returns. Once the response is handled the state
        becomes ``Results``, ``NoResults`` or, on failure, ``NotSearchedYet``,
        and ``on_complete`` is called with ``True`` for a successful request
        or ``False`` for a failed one. A response that cannot be read at all
        counts as a failure and leaves a :class:`ParseError` in
        :attr:`last_error`.

        Args:
            text: Search text; blank text is ignored.
            category: Catalog filter.
            on_complete: Optional completion callback.

        Returns:
            True if a search was started, False if ``text`` was blank.
        """
        if not text or not text.strip():
            logger.debug("Ignoring blank search text")
            return False

        self._cancel_pending()
        self._generation += 1
        self._last_error = None
        self._set_state(Loading())

        url = self.build_url(text, category)
        try:
            handle = self._fetcher.fetch(url)
        except RuntimeError:
            self._set_state(NotSearchedYet())
            raise
        self._handle = handle
        handle.add_done_callback(
            functools.partial(self._on_fetch_done, self._generation, on_complete)
        )
        return True

    def cancel(self) -> None:
        """Cancel the outstanding search, if any.

        A ``Loading`` state falls back to ``NotSearchedYet``; no completion
        callback is called.
        """
        if self._cancel_pending() and self.is_loading:
            self._set_state(NotSearchedYet())

    async def wait(self) -> FetchOutcome | None:
        """Wait for the outstanding fetch to finish.

        Returns:
            The fetch outcome, or None if no search was in flight.
        """
        handle = self._handle
        if handle is None:
            return None
        return await handle

    def _cancel_pending(self) -> bool:
        handle, self._handle = self._handle, None
        if handle is None or handle.done:
            return False
        logger.debug("Cancelling superseded search: %s", handle.url)
        self._generation += 1
        handle.cancel()
        return True

    def _on_fetch_done(
        self,
        generation: int,
        on_complete: CompletionCallback | None,
        outcome: FetchOutcome,
    ) -> None:
        if outcome.cancelled or generation != self._generation:
            logger.debug("Discarding superseded response: %s", outcome.url)
            return

        self._handle = None

        if not outcome.ok:
            self._fail(self._transport_failure(outcome), on_complete)
            return

        try:
            results = sort_results(self._parser.parse(outcome.content or b""))
        except Exception as exc:
            failure = ParseError(f"Could not read response from {outcome.url}: {exc}")
            failure.__cause__ = exc
            self._fail(failure, on_complete)
            return

        logger.info("Search returned %d results: %s", len(results), outcome.url)
        self._set_state(Results(tuple(results)) if results else NoResults())
        if on_complete:
            on_complete(True)

    def _fail(self, error: SearchError, on_complete: CompletionCallback | None) -> None:
        self._last_error = error
        logger.warning("Search failed: %s", error)
        self._set_state(NotSearchedYet())
        if on_complete:
            on_complete(False)

    @staticmethod
    def _transport_failure(outcome: FetchOutcome) -> TransportFailure:
        if outcome.error is not None:
            message = f"Request to {outcome.url} failed: {outcome.error}"
        else:
            message = f"Request to {outcome.url} failed with status {outcome.status}"
        failure = TransportFailure(message, url=outcome.url, status=outcome.status)
        failure.__cause__ = outcome.error
        return failure

    def _set_state(self, state: SearchState) -> None:
        self._state = state
        for observer in list(self._observers):
            try:
                observer(state)
            except Exception:
                logger.exception("State observer %r failed on %r", observer, state)
