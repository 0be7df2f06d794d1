"""
Ordering of search results: case-insensitive, locale-aware, by name.
"""

import locale
from collections.abc import Iterable

from storesearch.schemas import SearchResult


def _collation_text(name: str) -> str:
    # strxfrm/strcoll reject embedded NUL characters
    return name.casefold().replace("\x00", "")


def ranking_key(result: SearchResult) -> str:
    """Sort key of a result under the current ``LC_COLLATE`` locale."""
    return locale.strxfrm(_collation_text(result.name))


def compare(a: SearchResult, b: SearchResult) -> int:
    """Three-way comparison consistent with :func:`ranking_key`.

    Returns:
        A negative number, zero or a positive number if ``a`` sorts before,
        together with, or after ``b``.
    """
    return locale.strcoll(_collation_text(a.name), _collation_text(b.name))


def sort_results(results: Iterable[SearchResult]) -> list[SearchResult]:
    """Return the results sorted by name; equal names keep input order."""
    return sorted(results, key=ranking_key)


def sort_in_place(results: list[SearchResult]) -> None:
    results.sort(key=ranking_key)
