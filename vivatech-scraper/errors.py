"""Error types raised by the VivaTech scraper pipeline."""

from typing import Any, Optional


class ScraperError(Exception):
    """Base class for every fatal pipeline error."""


class FetchError(ScraperError):
    """An HTTP request kept failing after all retries."""

    def __init__(self, url: str, status: Optional[int] = None, reason: str = ""):
        self.url = url
        self.status = status
        self.reason = reason
        detail = f"HTTP {status}" if status is not None else "no response"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(f"Failed to fetch {url} ({detail})")


class ParseError(ScraperError):
    """A response body was not JSON or had no records array."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Could not parse response from {source}: {reason}")


class MappingError(ScraperError):
    """A raw record is missing the field that identifies it."""

    def __init__(self, reason: str, raw: Any = None):
        self.reason = reason
        self.raw = raw
        super().__init__(reason)
