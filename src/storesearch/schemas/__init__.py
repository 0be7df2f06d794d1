"""
Data contracts and type definitions.
"""

__all__ = [
    "Category",
    "SearchConfig",
    "SessionConfig",
    "SearchResult",
    "SearchState",
    "NotSearchedYet",
    "Loading",
    "NoResults",
    "Results",
]

from .category import Category
from .config import SearchConfig, SessionConfig
from .result import SearchResult
from .state import Loading, NoResults, NotSearchedYet, Results, SearchState
