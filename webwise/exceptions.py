"""Exception types for webwise."""

from __future__ import annotations


class WebwiseError(Exception):
    """Base exception for expected application errors."""


class NetworkError(WebwiseError):
    """Raised when a network operation fails."""

    def __init__(self, url: str, *, cause: str | None = None) -> None:
        detail = f"Unable to connect to {url}"
        if cause:
            detail = f"{detail} ({cause})"
        super().__init__(detail)


class RequestTimeoutError(WebwiseError):
    """Raised when a request times out."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Request timed out for {url}")


class HttpStatusError(WebwiseError):
    """Raised when a non-200 HTTP response is returned."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"Request failed with HTTP {status_code} for {url}")


class ContentError(WebwiseError):
    """Raised when a response body is invalid or unexpectedly empty."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Received empty or invalid content from {url}")


class DatasetError(WebwiseError):
    """Raised when the feature catalog cannot be read."""

    def __init__(self, origin: str, *, cause: str | None = None) -> None:
        detail = f"Unable to load web-features data from {origin}"
        if cause:
            detail = f"{detail} ({cause})"
        super().__init__(detail)


class InvalidInputError(WebwiseError):
    """Raised when a request is missing required input."""


class AdviceError(WebwiseError):
    """Raised when the AI advice response does not have the expected shape."""
