"""
Lifecycle states of a search session.

Exactly one state is active at a time. Consumers are expected to dispatch on
the concrete type with ``match``::

    match session.state:
        case NotSearchedYet():
            ...
        case Loading():
            ...
        case NoResults():
            ...
        case Results(items=items):
            ...
"""

from dataclasses import dataclass
from typing import TypeAlias

from .result import SearchResult


@dataclass(frozen=True, slots=True)
class NotSearchedYet:
    """Initial state, also restored after a failed search."""


@dataclass(frozen=True, slots=True)
class Loading:
    """A request is in flight."""


@dataclass(frozen=True, slots=True)
class NoResults:
    """The request succeeded but produced no records."""


@dataclass(frozen=True, slots=True)
class Results:
    """The request succeeded with at least one record.

    Attributes:
        items: Records already sorted by name.
    """

    items: tuple[SearchResult, ...]

    def __len__(self) -> int:
        return len(self.items)


SearchState: TypeAlias = NotSearchedYet | Loading | NoResults | Results
