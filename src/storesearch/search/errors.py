class SearchError(Exception):
    """Base class for search pipeline failures."""


class TransportFailure(SearchError):
    """The request failed or returned a non-success status."""

    def __init__(self, message: str, *, url: str = "", status: int | None = None):
        super().__init__(message)
        self.url = url
        self.status = status


class ParseError(SearchError):
    """Generic parsing failure."""


class MalformedPayload(ParseError):
    """The payload is not JSON or has no ``results`` array."""


class RequiredFieldMissing(ParseError):
    """A record lacks a field its shape requires."""

    def __init__(self, field: str, shape: str):
        super().__init__(f"{shape} record is missing required field {field!r}")
        self.field = field
        self.shape = shape
