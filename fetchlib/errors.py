from typing import Optional


class FetchError(Exception):
    """Base class for every failure fetch_data can report."""

    @property
    def message(self) -> str:
        return str(self)


class TransportError(FetchError):
    """No usable response: connection refused, DNS failure, broken stream."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class HttpStatusError(FetchError):
    def __init__(self, status: int, reason: str = "", url: Optional[str] = None):
        super().__init__(f"Fetch failed. {status} {reason}".rstrip())
        self.status = status
        self.reason = reason
        self.url = url


class ParseError(FetchError):
    """The body could not be decoded as its declared content type."""

    def __init__(self, message: str, content_type: str = "", url: Optional[str] = None):
        super().__init__(message)
        self.content_type = content_type
        self.url = url
