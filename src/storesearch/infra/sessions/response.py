"""
Utility classes for representing HTTP responses within the StoreSearch
session system.

These objects are decoupled from any specific HTTP backend so the search
pipeline never sees aiohttp or httpx types.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping, Sequence
from typing import Any


class Headers(Mapping[str, str]):
    """A read-only, case-insensitive header mapping.

    Keys are stored lowercase. Repeated header fields keep every value;
    item access returns the first one.

    Args:
        headers: Optional header mapping or sequence of key-value pairs.
    """

    __slots__ = ("_store",)

    def __init__(
        self,
        headers: Mapping[str, str] | Sequence[tuple[str, str]] | None = None,
    ) -> None:
        self._store: dict[str, list[str]] = {}
        if not headers:
            return

        pairs = headers.items() if isinstance(headers, Mapping) else headers
        for key, value in pairs:
            self._store.setdefault(key.lower(), []).append(value or "")

    def get_all(self, key: str) -> list[str]:
        return list(self._store.get(key.lower(), []))

    def __getitem__(self, key: str) -> str:
        values = self._store.get(key.lower())
        if not values:
            raise KeyError(key)
        return values[0]

    def __iter__(self) -> Iterator[str]:
        return iter(self._store)

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._store

    def __repr__(self) -> str:
        return f"<Headers {sorted(self._store)}>"


class BaseResponse:
    """A lightweight, backend-agnostic HTTP response.

    Args:
        content: Raw response body as bytes.
        headers: Optional header mapping or sequence of header pairs.
        status: HTTP status code.
        encoding: Text encoding used when decoding the body.
    """

    __slots__ = ("content", "headers", "status", "encoding")

    def __init__(
        self,
        *,
        content: bytes,
        headers: Mapping[str, str] | Sequence[tuple[str, str]] | None = None,
        status: int = 200,
        encoding: str = "utf-8",
    ) -> None:
        self.content = content
        self.headers = Headers(headers)
        self.status = status
        self.encoding = encoding

    @property
    def text(self) -> str:
        """Returns the decoded body.

        Falls back to UTF-8 when the declared encoding is unknown, and
        replaces undecodable bytes instead of raising.
        """
        try:
            return self.content.decode(self.encoding, errors="replace")
        except LookupError:
            return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Parses the body as JSON.

        Raises:
            json.JSONDecodeError: If the content is not valid JSON.
        """
        return json.loads(self.text)

    @property
    def ok(self) -> bool:
        """True if the status code is below 400."""
        return self.status < 400

    def __repr__(self) -> str:
        return f"<BaseResponse status={self.status} len={len(self.content)}>"
