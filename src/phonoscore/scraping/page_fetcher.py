"""aiohttp-based fetcher for device pages."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass

import aiohttp

from ..domain.errors import FetchError, InvalidURLError, NetworkTimeoutError
from ..observability.logger import get_logger
from ..utils.validators import is_valid_http_url

logger = get_logger(__name__)


@dataclass(frozen=True)
class FetchedPage:
    url: str
    html: str
    status: int


class PageFetcher:
    """Scraping layer.

    Responsibilities:
    - Download the raw HTML of a device page
    - Apply the configured timeout and user agent
    - Return raw HTML (no parsing, no scoring)

    The ``aiohttp.ClientSession`` is owned by the caller.
    """

    def __init__(self, session: aiohttp.ClientSession, *, timeout_seconds: float, user_agent: str):
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._user_agent = user_agent

    async def fetch_html(self, url: str) -> FetchedPage:
        if not is_valid_http_url(url):
            raise InvalidURLError("That's not a valid URL.", detail=url)

        started = time.perf_counter()
        try:
            async with self._session.get(
                url,
                timeout=self._timeout,
                headers={"User-Agent": self._user_agent},
            ) as resp:
                if resp.status >= 400:
                    raise FetchError(f"HTTP {resp.status} while fetching {url}", detail=resp.reason)
                html = await resp.text(errors="replace")
        except asyncio.TimeoutError as e:
            raise NetworkTimeoutError(f"Timeout while fetching {url}", detail=str(e)) from e
        except aiohttp.ClientError as e:
            raise FetchError(f"Failed to fetch {url}", detail=str(e)) from e

        logger.info(
            "page_fetched",
            url=url,
            status=resp.status,
            bytes=len(html),
            elapsed_ms=int((time.perf_counter() - started) * 1000),
        )
        return FetchedPage(url=url, html=html, status=resp.status)
