"""Fetch helpers for the GitHub contents API and raw file downloads.

Failures never raise past this module: every fetch returns either a
``FetchOk`` holding the payload or a ``FetchError`` describing what went
wrong, and the caller decides what to skip.
"""
import logging
from dataclasses import dataclass
from typing import Any, Union

import httpx
from typing_extensions import Literal

logger = logging.getLogger(__name__)

GITHUB_API_BASE = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class FetchOk:
    content: Any


@dataclass(frozen=True)
class FetchError:
    url: str
    reason: str


FetchResult = Union[FetchOk, FetchError]


def github_contents_url(owner: str, repo: str, path: str) -> str:
    return f"{GITHUB_API_BASE}/repos/{owner}/{repo}/contents/{path.strip('/')}"


def async_client(timeout: float = DEFAULT_TIMEOUT) -> httpx.AsyncClient:
    """Create an AsyncClient that speaks to the GitHub API and its raw file host.

    Example:
        async with async_client() as client:
            result = await fetch_data(client, url)
    """
    return httpx.AsyncClient(
        headers={
            "Accept": "application/vnd.github+json",
            "User-Agent": "svg-hue-gallery",
        },
        timeout=timeout,
        follow_redirects=True,
    )


async def fetch_data(
    client: httpx.AsyncClient,
    url: str,
    data_type: Literal["json", "text"] = "json",
) -> FetchResult:
    """GET `url` and decode it as JSON or text."""
    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        return _failed(url, f"HTTP {e.response.status_code}")
    except httpx.HTTPError as e:
        return _failed(url, f"{type(e).__name__}: {e}")

    if data_type == "text":
        return FetchOk(response.text)
    try:
        return FetchOk(response.json())
    except ValueError as e:
        return _failed(url, f"invalid JSON ({e})")


def _failed(url: str, reason: str) -> FetchError:
    logger.error("There has been a problem fetching %s: %s", url, reason)
    return FetchError(url, reason)
