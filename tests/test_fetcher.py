import asyncio

import pytest
from aiohttp import web

from assetloader.download import AssetFetcher
from assetloader.exceptions import (
    DownloadFailedError,
    ErrorKind,
    InvalidLocationError,
    NetworkError,
)
from fakes import serve


async def _asset(request: web.Request) -> web.Response:
    return web.Response(body=b"\x01\x02\x03", content_type="image/png")


async def _missing(request: web.Request) -> web.Response:
    return web.Response(status=404)


async def _broken(request: web.Request) -> web.Response:
    return web.Response(status=503)


async def _created(request: web.Request) -> web.Response:
    return web.Response(status=201, body=b"ok")


ROUTES = [
    web.get("/pkg/a.png", _asset),
    web.get("/pkg/b.png", _missing),
    web.get("/pkg/c.png", _broken),
    web.get("/pkg/d.png", _created),
]


def test_fetch_returns_body_for_success_statuses() -> None:
    async def scenario(server):
        async with AssetFetcher() as fetcher:
            first = await fetcher.fetch(str(server.make_url("/pkg/a.png")))
            second = await fetcher.fetch(str(server.make_url("/pkg/d.png")))
        return first, second

    first, second = asyncio.run(serve(ROUTES, scenario))

    assert first == b"\x01\x02\x03"
    assert second == b"ok"


@pytest.mark.parametrize("route,status", [("/pkg/b.png", 404), ("/pkg/c.png", 503)])
def test_fetch_non_success_status_raises_download_failed(route, status) -> None:
    async def scenario(server):
        url = str(server.make_url(route))
        async with AssetFetcher() as fetcher:
            with pytest.raises(DownloadFailedError) as excinfo:
                await fetcher.fetch(url)
        return url, excinfo.value

    url, error = asyncio.run(serve(ROUTES, scenario))

    assert error.status == status
    assert error.location == url
    assert error.kind is ErrorKind.DOWNLOAD_FAILED


@pytest.mark.parametrize(
    "location", ["", "not a url", "ftp://cdn.example.com/a.png", "http://[::1/a.png"]
)
def test_fetch_rejects_invalid_locations_without_a_request(location) -> None:
    async def scenario():
        fetcher = AssetFetcher()
        try:
            with pytest.raises(InvalidLocationError):
                await fetcher.fetch(location)
            assert fetcher._session is None
        finally:
            await fetcher.close()

    asyncio.run(scenario())


def test_fetch_wraps_transport_errors_as_network_error() -> None:
    async def closed_url(server):
        return str(server.make_url("/pkg/a.png"))

    url = asyncio.run(serve(ROUTES, closed_url))

    async def scenario():
        async with AssetFetcher(timeout=5) as fetcher:
            with pytest.raises(NetworkError) as excinfo:
                await fetcher.fetch(url)
        return excinfo.value

    error = asyncio.run(scenario())

    assert error.kind is ErrorKind.NETWORK_ERROR
    assert error.cause is not None
    assert error.context["location"] == url
