from __future__ import annotations

import asyncio
import json
from typing import Any

from storesearch.infra.sessions import BaseResponse, BaseSession


def track(name: str = "Dancing Queen", **overrides: Any) -> dict[str, Any]:
    record = {
        "wrapperType": "track",
        "kind": "song",
        "trackName": name,
        "artistName": "ABBA",
        "artworkUrl60": "https://example.com/t60.jpg",
        "artworkUrl100": "https://example.com/t100.jpg",
        "trackViewUrl": "https://example.com/track",
        "currency": "USD",
        "trackPrice": 1.29,
        "primaryGenreName": "Pop",
    }
    record.update(overrides)
    return record


def audiobook(**overrides: Any) -> dict[str, Any]:
    record = {
        "wrapperType": "audiobook",
        "collectionName": "The Hobbit",
        "artistName": "J.R.R. Tolkien",
        "artworkUrl60": "https://example.com/a60.jpg",
        "artworkUrl100": "https://example.com/a100.jpg",
        "collectionViewUrl": "https://example.com/audiobook",
        "currency": "USD",
        "collectionPrice": 20.99,
        "primaryGenreName": "Fiction",
    }
    record.update(overrides)
    return record


def software(**overrides: Any) -> dict[str, Any]:
    record = {
        "wrapperType": "software",
        "kind": "software",
        "trackName": "Notes Pro",
        "artistName": "Acme Inc.",
        "artworkUrl60": "https://example.com/s60.jpg",
        "artworkUrl100": "https://example.com/s100.jpg",
        "trackViewUrl": "https://example.com/app",
        "currency": "EUR",
        "price": 4.99,
        "primaryGenreName": "Productivity",
    }
    record.update(overrides)
    return record


def ebook(**overrides: Any) -> dict[str, Any]:
    record = {
        "kind": "ebook",
        "trackName": "Dune",
        "artistName": "Frank Herbert",
        "artworkUrl60": "https://example.com/e60.jpg",
        "artworkUrl100": "https://example.com/e100.jpg",
        "trackViewUrl": "https://example.com/ebook",
        "currency": "GBP",
        "price": 7.99,
        "genres": ["Sci-Fi & Fantasy", "Books"],
        "primaryGenreName": "Ignored",
    }
    record.update(overrides)
    return record


def payload(*records: dict[str, Any]) -> bytes:
    return json.dumps({"resultCount": len(records), "results": list(records)}).encode()


class StubSession(BaseSession):
    """In-memory session whose responses are released by the test.

    Every GET waits on a per-URL future; tests resolve it with
    :meth:`respond` or :meth:`fail`.
    """

    def __init__(self) -> None:
        super().__init__()
        self.requests: list[str] = []
        self.request_kwargs: list[dict[str, Any]] = []
        self._gates: dict[str, asyncio.Future[BaseResponse]] = {}

    async def init(self, **kwargs: Any) -> None:
        self._session = object()

    async def close(self) -> None:
        self._session = None

    def gate(self, url: str) -> asyncio.Future[BaseResponse]:
        if url not in self._gates:
            self._gates[url] = asyncio.get_running_loop().create_future()
        return self._gates[url]

    def respond(self, url: str, content: bytes, status: int = 200) -> None:
        self.gate(url).set_result(BaseResponse(content=content, status=status))

    def fail(self, url: str, exc: BaseException) -> None:
        self.gate(url).set_exception(exc)

    async def get(self, url: str, **kwargs: Any) -> BaseResponse:
        self.requests.append(url)
        self.request_kwargs.append(kwargs)
        return await self.gate(url)
