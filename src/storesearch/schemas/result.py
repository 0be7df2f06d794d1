from dataclasses import dataclass

KIND_DISPLAY_NAMES: dict[str, str] = {
    "album": "Album",
    "audiobook": "Audio Book",
    "book": "Book",
    "ebook": "E-Book",
    "feature-movie": "Movie",
    "music-video": "Music Video",
    "podcast": "Podcast",
    "software": "App",
    "song": "Song",
    "tv-episode": "TV Episode",
}

UNKNOWN_ARTIST = "Unknown"
FREE_PRICE = "Free"


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Normalized representation of a single catalog entry.

    Attributes:
        name: Track, collection or app name.
        artist_name: Artist or developer name; may be empty.
        artwork_small_url: URL of the 60px artwork (list thumbnail).
        artwork_large_url: URL of the 100px artwork (detail view).
        store_url: URL of the item's store page.
        kind: Catalog kind tag such as "song" or "ebook".
        currency: ISO 4217 currency code of ``price``.
        price: Item price, 0 when the item is free or unpriced.
        genre: Primary genre, or the joined genre list for e-books.
    """

    name: str
    artist_name: str
    artwork_small_url: str
    artwork_large_url: str
    store_url: str
    kind: str
    currency: str
    price: float = 0.0
    genre: str = ""

    def kind_for_display(self) -> str:
        """Return a human label for ``kind``; unknown kinds pass through."""
        return KIND_DISPLAY_NAMES.get(self.kind, self.kind)

    def artist_for_display(self) -> str:
        return self.artist_name or UNKNOWN_ARTIST

    def price_for_display(self) -> str:
        """Format the price as shown on the buy button.

        Returns:
            "Free" for a zero price, otherwise the amount with two decimals
            prefixed by the currency code (e.g. "USD 9.99").
        """
        if self.price == 0:
            return FREE_PRICE
        return f"{self.currency} {self.price:.2f}".strip()

    def subtitle(self) -> str:
        """Secondary line of a result row: artist and kind label."""
        if not self.artist_name:
            return UNKNOWN_ARTIST
        return f"{self.artist_name} ({self.kind_for_display()})"
