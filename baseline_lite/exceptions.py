"""Exception types for pybaseline-lite."""

from __future__ import annotations


class BaselineLiteError(Exception):
    """Base exception for expected application errors."""


class DownloadError(BaselineLiteError):
    """A remote dataset could not be obtained."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(message)


class NetworkError(DownloadError):
    def __init__(self, url: str, *, cause: str | None = None) -> None:
        message = f"Unable to download dataset from {url}"
        if cause:
            message = f"{message} ({cause})"
        super().__init__(url, message)


class RequestTimeoutError(DownloadError):
    def __init__(self, url: str) -> None:
        super().__init__(url, f"Timed out downloading {url}")


class HttpStatusError(DownloadError):
    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        super().__init__(url, f"Dataset server answered HTTP {status_code} for {url}")


class ContentError(DownloadError):
    """The server answered, but the body is not a usable JSON document."""

    def __init__(self, url: str, reason: str = "invalid JSON content") -> None:
        self.reason = reason
        super().__init__(url, f"Received {reason} from {url}")


class DatasetError(BaselineLiteError):
    """Raised when a local dataset file cannot be read or has the wrong shape."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        super().__init__(f"Unable to load dataset {source}: {reason}")


class ConfigError(BaselineLiteError):
    """Raised when configuration values are invalid."""
