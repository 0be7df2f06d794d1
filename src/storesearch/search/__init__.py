"""
The catalog search pipeline: fetch, parse, rank and expose search state.
"""

__all__ = [
    "FetchHandle",
    "FetchOutcome",
    "MalformedPayload",
    "ParseError",
    "RequiredFieldMissing",
    "ResponseParser",
    "SearchError",
    "SearchSession",
    "StoreFetcher",
    "TransportFailure",
    "compare",
    "ranking_key",
    "sort_in_place",
    "sort_results",
]

from .errors import (
    MalformedPayload,
    ParseError,
    RequiredFieldMissing,
    SearchError,
    TransportFailure,
)
from .fetcher import FetchHandle, FetchOutcome, StoreFetcher
from .parser import ResponseParser
from .ranking import compare, ranking_key, sort_in_place, sort_results
from .session import SearchSession
