"""
HTTP access for artwork and audio files.

Download steps only depend on the `ResourceFetcher` protocol, so any object
with a compatible `fetch` context manager can stand in for the network.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import urlsplit

import aiohttp

from khinsider_cli import __version__
from khinsider_cli.exceptions import FetchError
from khinsider_cli.models.config import DownloadConfig

log = logging.getLogger(__name__)


@dataclass
class FetchResponse:
    """Status code and body stream of a fetched resource."""

    status: int
    body: AsyncIterator[bytes]


class ResourceFetcher(Protocol):
    """
    Fetches a URL. The body stream is released when the context exits and
    transport failures are raised as `FetchError`.
    """

    def fetch(self, url: str) -> AbstractAsyncContextManager[FetchResponse]: ...


class HttpResourceFetcher:
    """An aiohttp-backed fetcher with per-request retries and socket timeouts."""

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: float = 1.5,
        connect_timeout: float = 15.0,
        read_timeout: float = 90.0,
        chunk_size: int = 131072,
    ):
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.chunk_size = chunk_size
        self._session: aiohttp.ClientSession | None = None

    @classmethod
    def from_config(cls, config: DownloadConfig) -> "HttpResourceFetcher":
        return cls(
            max_attempts=config.max_attempts,
            connect_timeout=config.connect_timeout,
            read_timeout=config.read_timeout,
            chunk_size=config.chunk_size,
        )

    async def _get_session(self) -> aiohttp.ClientSession:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": f"khinsider-cli/{__version__}"},
                timeout=aiohttp.ClientTimeout(
                    total=None,
                    sock_connect=self.connect_timeout,
                    sock_read=self.read_timeout,
                ),
            )
            log.debug("Created HTTP session for downloads.")
        return self._session

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()
            log.debug("HTTP session closed.")

    async def __aenter__(self) -> "HttpResourceFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _open(self, url: str) -> aiohttp.ClientResponse:
        """
        Sends the GET request, retrying connection failures with back-off.
        Malformed and non-HTTP URLs fail on the first attempt.
        """
        if urlsplit(url).scheme not in ("http", "https"):
            raise FetchError(f"Not an HTTP URL: {url!r}")

        last_exception: Exception | None = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                session = await self._get_session()
                return await session.get(url, allow_redirects=True)
            except aiohttp.InvalidURL as e:
                raise FetchError(f"Invalid URL {url!r}: {e}") from e
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_exception = e
                log.debug(
                    f"Request attempt {attempt}/{self.max_attempts} for {url} "
                    f"failed: {e!r}"
                )
                if attempt < self.max_attempts:
                    await asyncio.sleep(self.base_delay * (2 ** (attempt - 1)))

        raise FetchError(f"Could not fetch {url}: {last_exception!r}") from last_exception

    async def _iter_body(
        self, response: aiohttp.ClientResponse, url: str
    ) -> AsyncIterator[bytes]:
        try:
            async for chunk in response.content.iter_chunked(self.chunk_size):
                yield chunk
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FetchError(f"Connection lost while reading {url}: {e!r}") from e

    @asynccontextmanager
    async def fetch(self, url: str) -> AsyncIterator[FetchResponse]:
        response = await self._open(url)
        async with response:
            yield FetchResponse(status=response.status, body=self._iter_body(response, url))
