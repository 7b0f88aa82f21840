import asyncio
from typing import Dict, List, Optional, Union

from aiohttp import test_utils, web

from assetloader.download import AssetFetcher
from assetloader.exceptions import DownloadFailedError
from assetloader.models import Manifest
from assetloader.services import ManifestSource


class FakeFetcher(AssetFetcher):
    """按地址返回预设内容或异常的下载器"""

    def __init__(self, responses: Optional[Dict[str, Union[bytes, Exception]]] = None):
        super().__init__()
        self.responses = dict(responses or {})
        self.calls: List[str] = []

    async def fetch(self, location: str) -> bytes:
        self.calls.append(location)
        await asyncio.sleep(0)
        result = self.responses.get(location)
        if result is None:
            raise DownloadFailedError(location, 404)
        if isinstance(result, Exception):
            raise result
        return result


class FakeManifestSource(ManifestSource):
    def __init__(self, manifest: Optional[Manifest] = None, error: Optional[Exception] = None):
        self.manifest = manifest
        self.error = error
        self.calls: List[str] = []

    async def fetch(self, identifier: str) -> Manifest:
        self.calls.append(identifier)
        if self.error is not None:
            raise self.error
        return self.manifest


async def serve(routes, func):
    """启动本地 aiohttp 服务器并把它交给 func"""
    app = web.Application()
    app.add_routes(routes)
    server = test_utils.TestServer(app)
    await server.start_server()
    try:
        return await func(server)
    finally:
        await server.close()
