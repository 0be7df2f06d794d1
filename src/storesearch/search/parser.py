"""
Parser turning catalog search payloads into normalized results.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

from storesearch.schemas import SearchResult

from .errors import MalformedPayload, RequiredFieldMissing

logger = logging.getLogger(__name__)

RecordParser = Callable[[dict[str, Any]], SearchResult]


class ResponseParser:
    """Converts a raw ``{"results": [...]}`` payload into search results.

    Records are classified by ``wrapperType`` (track, audiobook, software)
    or, when that is absent, by ``kind == "ebook"``. Unrecognized records
    and records missing a required field are dropped; an unreadable payload
    yields no results at all.
    """

    def __init__(self) -> None:
        self._wrapper_parsers: dict[str, RecordParser] = {
            "track": self._parse_track,
            "audiobook": self._parse_audiobook,
            "software": self._parse_software,
        }
        self._kind_parsers: dict[str, RecordParser] = {
            "ebook": self._parse_ebook,
        }

    def parse(self, raw: bytes | str) -> list[SearchResult]:
        """Parse a payload into results, in payload order.

        Args:
            raw: Response body as returned by the catalog API.

        Returns:
            The parsed results; empty when the payload is malformed.
        """
        try:
            records = self.load_payload(raw)
        except MalformedPayload as exc:
            logger.warning("Ignoring malformed search payload: %s", exc)
            return []

        results: list[SearchResult] = []
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                continue
            try:
                result = self.parse_record(record)
            except RequiredFieldMissing as exc:
                logger.warning("Dropping search result #%d: %s", index, exc)
                continue
            if result is not None:
                results.append(result)

        logger.debug("Parsed %d of %d records", len(results), len(records))
        return results

    @staticmethod
    def load_payload(raw: bytes | str) -> list[Any]:
        """Decode the payload and return its ``results`` array.

        Raises:
            MalformedPayload: If ``raw`` is not a JSON object holding a
                ``results`` array.
        """
        try:
            payload = json.loads(raw)
        except (ValueError, RecursionError) as exc:
            raise MalformedPayload(f"invalid JSON: {exc}") from exc

        if not isinstance(payload, dict):
            raise MalformedPayload(f"expected an object, got {type(payload).__name__}")

        records = payload.get("results")
        if not isinstance(records, list):
            raise MalformedPayload("expected 'results' array")
        return records

    def parse_record(self, record: dict[str, Any]) -> SearchResult | None:
        """Parse one raw record.

        Returns:
            The parsed result, or None if the record shape is not supported.

        Raises:
            RequiredFieldMissing: If the record lacks a required field.
        """
        wrapper_type = record.get("wrapperType")
        kind = record.get("kind")
        handler: RecordParser | None = None
        if isinstance(wrapper_type, str):
            handler = self._wrapper_parsers.get(wrapper_type)
        elif isinstance(kind, str):
            handler = self._kind_parsers.get(kind)
        return handler(record) if handler else None

    # ------------------------------------------------------------------
    # record shapes
    # ------------------------------------------------------------------

    @classmethod
    def _parse_track(cls, record: dict[str, Any]) -> SearchResult:
        return cls._build(
            record,
            "track",
            name=cls._required(record, "trackName", "track"),
            store_url=cls._required(record, "trackViewUrl", "track"),
            kind=cls._required(record, "kind", "track"),
            price=cls._price(record, "trackPrice"),
        )

    @classmethod
    def _parse_audiobook(cls, record: dict[str, Any]) -> SearchResult:
        return cls._build(
            record,
            "audiobook",
            name=cls._required(record, "collectionName", "audiobook"),
            store_url=cls._required(record, "collectionViewUrl", "audiobook"),
            kind="audiobook",
            price=cls._price(record, "collectionPrice"),
        )

    @classmethod
    def _parse_software(cls, record: dict[str, Any]) -> SearchResult:
        return cls._build(
            record,
            "software",
            name=cls._required(record, "trackName", "software"),
            store_url=cls._required(record, "trackViewUrl", "software"),
            kind=cls._required(record, "kind", "software"),
            price=cls._price(record, "price"),
        )

    @classmethod
    def _parse_ebook(cls, record: dict[str, Any]) -> SearchResult:
        genres = record.get("genres")
        genre = (
            ", ".join(g for g in genres if isinstance(g, str))
            if isinstance(genres, list)
            else ""
        )
        return cls._build(
            record,
            "ebook",
            name=cls._required(record, "trackName", "ebook"),
            store_url=cls._required(record, "trackViewUrl", "ebook"),
            kind=cls._required(record, "kind", "ebook"),
            price=cls._price(record, "price"),
            genre=genre,
        )

    @classmethod
    def _build(
        cls,
        record: dict[str, Any],
        shape: str,
        *,
        name: str,
        store_url: str,
        kind: str,
        price: float,
        genre: str | None = None,
    ) -> SearchResult:
        """Fill in the fields every shape shares."""
        if genre is None:
            primary = record.get("primaryGenreName")
            genre = primary if isinstance(primary, str) else ""

        return SearchResult(
            name=name,
            artist_name=cls._required(record, "artistName", shape, allow_empty=True),
            artwork_small_url=cls._required(record, "artworkUrl60", shape),
            artwork_large_url=cls._required(record, "artworkUrl100", shape),
            store_url=store_url,
            kind=kind,
            currency=cls._required(record, "currency", shape),
            price=price,
            genre=genre,
        )

    @staticmethod
    def _required(
        record: dict[str, Any],
        key: str,
        shape: str,
        allow_empty: bool = False,
    ) -> str:
        value = record.get(key)
        if not isinstance(value, str) or (not value and not allow_empty):
            raise RequiredFieldMissing(key, shape)
        return value

    @staticmethod
    def _price(record: dict[str, Any], key: str) -> float:
        value = record.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return 0.0
        return float(value)
