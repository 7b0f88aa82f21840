"""
AssetLoader 门面

把配置、清单客户端、下载器、本地存储、缓存管理器和协调器组装在一起。

用法:
    async with AssetLoader(AssetLoaderConfig(base_url="https://example.com/api")) as loader:
        manifest = await loader.load_manifest("download.id")
        summary = await loader.download_with_progress("download.id")
"""

from pathlib import Path
from typing import List, Optional

from assetloader.cache import CacheManager, FileSystemStore, LocalStore
from assetloader.download import AssetFetcher
from assetloader.models import AssetLoaderConfig, Manifest
from assetloader.orchestrator import (
    BatchDownloadOrchestrator,
    DownloadCallbacks,
    DownloadSummary,
)
from assetloader.services import ManifestClient, ManifestSource


class AssetLoader:
    """资源加载器"""

    def __init__(
        self,
        config: Optional[AssetLoaderConfig] = None,
        manifest_source: Optional[ManifestSource] = None,
        fetcher: Optional[AssetFetcher] = None,
        store: Optional[LocalStore] = None,
    ):
        self.config = config or AssetLoaderConfig()
        self.manifest_source = manifest_source or ManifestClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            headers=self.config.headers,
        )
        self.fetcher = fetcher or AssetFetcher(
            timeout=self.config.timeout, headers=self.config.headers
        )
        # 缓存根目录只在构造时解析一次
        self.store = store or FileSystemStore(self.config.cache_root)
        self.store.ensure_root()
        self.cache = CacheManager(
            self.store,
            self.fetcher,
            deduplicate=self.config.deduplicate,
            recursive_size=self.config.recursive_size,
        )
        self.orchestrator = BatchDownloadOrchestrator(self.manifest_source, self.cache)

    async def load_manifest(self, identifier: str) -> Manifest:
        """获取清单"""
        return await self.manifest_source.fetch(identifier)

    async def get_asset_locations(self, identifier: str) -> List[str]:
        """只获取清单中的资源地址"""
        manifest = await self.load_manifest(identifier)
        return list(manifest.assets)

    async def download_asset(self, location: str) -> bytes:
        """直接下载资源内容，不经过缓存"""
        return await self.fetcher.fetch(location)

    async def get_asset(self, location: str) -> Path:
        """获取资源本地路径，必要时下载"""
        return await self.cache.get_asset(location)

    async def download_with_progress(
        self, identifier: str, callbacks: Optional[DownloadCallbacks] = None
    ) -> DownloadSummary:
        """下载清单全部资源并回调进度"""
        return await self.orchestrator.run(identifier, callbacks)

    def is_cached(self, location: str) -> bool:
        return self.cache.is_cached(location)

    def cached_path(self, location: str) -> Optional[Path]:
        return self.cache.cached_path(location)

    def clear_cache(self) -> None:
        self.cache.clear_cache()

    def cache_size(self) -> int:
        return self.cache.cache_size()

    async def close(self):
        """关闭网络会话"""
        close = getattr(self.manifest_source, "close", None)
        if close is not None:
            await close()
        await self.fetcher.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
