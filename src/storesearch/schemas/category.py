from __future__ import annotations

from enum import Enum


class Category(Enum):
    """Catalog filter applied to a search.

    Each member's value is the entity-type token sent to the search API.
    """

    ALL = ""
    MUSIC = "musicTrack"
    SOFTWARE = "software"
    EBOOKS = "ebook"

    @property
    def entity(self) -> str:
        """Entity-type token used in the ``entity`` query parameter."""
        return self.value

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_name(cls, name: str) -> Category:
        """Look up a category by member name or label, ignoring case.

        Raises:
            ValueError: If no category matches ``name``.
        """
        key = name.strip().casefold().replace("-", "")
        for member in cls:
            if key in (member.name.casefold(), member.label.casefold().replace("-", "")):
                return member
        raise ValueError(f"Unknown category: {name!r}")

    @classmethod
    def from_index(cls, index: int) -> Category:
        """Map a segmented-control position (0..3) to a category.

        Raises:
            IndexError: If ``index`` is out of range.
        """
        members = list(cls)
        if not 0 <= index < len(members):
            raise IndexError(f"Category index out of range: {index}")
        return members[index]


_LABELS: dict[Category, str] = {
    Category.ALL: "All",
    Category.MUSIC: "Music",
    Category.SOFTWARE: "Software",
    Category.EBOOKS: "E-books",
}
