"""HTTP client layer for dataset downloads."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
import logging
from typing import Any

import httpx

from ._version import __version__
from .constants import DEFAULT_TIMEOUT_SECONDS
from .exceptions import ContentError, HttpStatusError, NetworkError, RequestTimeoutError

LOGGER = logging.getLogger(__name__)

_SHARED_CLIENT: ContextVar[httpx.Client | None] = ContextVar(
    "baseline_lite_shared_client", default=None
)
_CONNECT_ATTEMPTS = 2


def _new_client(timeout: float) -> httpx.Client:
    return httpx.Client(
        timeout=timeout,
        follow_redirects=True,
        headers={
            "User-Agent": f"pybaseline-lite/{__version__}",
            "Accept": "application/json",
        },
    )


@contextmanager
def use_shared_client(
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Iterator[httpx.Client]:
    """Provide a reusable HTTP client for all downloads within a CLI run."""
    with _new_client(timeout) as client:
        token = _SHARED_CLIENT.set(client)
        try:
            yield client
        finally:
            _SHARED_CLIENT.reset(token)


@contextmanager
def _client_for(timeout: float) -> Iterator[httpx.Client]:
    # A shared client is only reused when its timeout matches.
    shared = _SHARED_CLIENT.get()
    if shared is not None and timeout == DEFAULT_TIMEOUT_SECONDS:
        yield shared
        return
    with _new_client(timeout) as client:
        yield client


def _download(url: str, timeout: float) -> httpx.Response:
    with _client_for(timeout) as client:
        for attempt in range(1, _CONNECT_ATTEMPTS + 1):
            try:
                return client.get(url)
            except httpx.TimeoutException as exc:
                raise RequestTimeoutError(url) from exc
            except httpx.ConnectError as exc:
                if attempt == _CONNECT_ATTEMPTS:
                    raise NetworkError(url, cause=type(exc).__name__) from exc
                LOGGER.debug("Connection to %s failed, retrying", url)
            except httpx.RequestError as exc:
                raise NetworkError(url, cause=type(exc).__name__) from exc
    raise NetworkError(url)


def fetch_json(url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> Any:
    """Download and decode a JSON dataset; every failure is a ``DownloadError``."""
    response = _download(url, timeout)
    final_url = str(response.url)
    if response.status_code != 200:
        raise HttpStatusError(response.status_code, final_url)
    if not response.content.strip():
        raise ContentError(final_url, "an empty response")
    try:
        payload = response.json()
    except ValueError as exc:
        raise ContentError(final_url) from exc
    LOGGER.debug("Downloaded %d bytes from %s", len(response.content), final_url)
    return payload
