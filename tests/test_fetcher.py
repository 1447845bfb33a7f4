"""Tests for the aiohttp-backed resource fetcher"""

import pytest
import aiohttp
from aiohttp import test_utils, web

from khinsider_cli.exceptions import FetchError
from khinsider_cli.media import fetcher as fetcher_module
from khinsider_cli.media.fetcher import HttpResourceFetcher
from khinsider_cli.models.config import DownloadConfig

PAYLOAD = bytes(range(256)) * 40


@pytest.fixture
async def server():
    async def flac(request):
        return web.Response(body=PAYLOAD, content_type="audio/flac")

    async def missing(request):
        return web.Response(status=404, text="not here")

    app = web.Application()
    app.router.add_get("/track.flac", flac)
    app.router.add_get("/missing.flac", missing)

    test_server = test_utils.TestServer(app)
    await test_server.start_server()
    yield test_server
    await test_server.close()


async def test_streams_body(server):
    async with HttpResourceFetcher(chunk_size=1024) as fetcher:
        async with fetcher.fetch(str(server.make_url("/track.flac"))) as response:
            assert response.status == 200
            body = b"".join([chunk async for chunk in response.body])

    assert body == PAYLOAD


async def test_reports_status_without_raising(server):
    async with HttpResourceFetcher() as fetcher:
        async with fetcher.fetch(str(server.make_url("/missing.flac"))) as response:
            assert response.status == 404


async def test_connection_failure_raises_fetch_error(server):
    url = str(server.make_url("/track.flac"))
    await server.close()

    async with HttpResourceFetcher(max_attempts=2, base_delay=0) as fetcher:
        with pytest.raises(FetchError):
            async with fetcher.fetch(url):
                pass


def test_from_config():
    config = DownloadConfig(max_attempts=5, read_timeout=30, chunk_size=4096)
    fetcher = HttpResourceFetcher.from_config(config)
    assert fetcher.max_attempts == 5
    assert fetcher.read_timeout == 30
    assert fetcher.chunk_size == 4096


class TestUrlsThatAreNotRetried:
    """Bad URLs fail straight away instead of waiting through the back-off"""

    @pytest.fixture
    def sleeps(self, monkeypatch):
        calls = []

        async def fake_sleep(delay):
            calls.append(delay)

        monkeypatch.setattr(fetcher_module.asyncio, "sleep", fake_sleep)
        return calls

    async def test_non_http_scheme(self, sleeps):
        async with HttpResourceFetcher(max_attempts=3) as fetcher:
            with pytest.raises(FetchError):
                async with fetcher.fetch("ftp://vgmsite.com/a.flac"):
                    pass
        assert sleeps == []

    async def test_invalid_url_from_aiohttp(self, sleeps, monkeypatch):
        class RejectingSession:
            closed = False
            calls = 0

            def get(self, url, **kwargs):
                RejectingSession.calls += 1
                raise aiohttp.InvalidURL(url)

            async def close(self):
                self.closed = True

        fetcher = HttpResourceFetcher(max_attempts=3)
        session = RejectingSession()

        async def get_session():
            return session

        monkeypatch.setattr(fetcher, "_get_session", get_session)

        with pytest.raises(FetchError):
            async with fetcher.fetch("http://vgmsite.com/a.flac"):
                pass
        assert RejectingSession.calls == 1
        assert sleeps == []
