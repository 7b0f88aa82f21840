"""
缓存管理器

组合路径映射、本地存储和下载器，实现“命中直接返回，未命中下载后写入”。
"""

import asyncio
from pathlib import Path
from typing import Dict, Optional

from loguru import logger

from assetloader.cache.paths import PathMapper
from assetloader.cache.store import LocalStore
from assetloader.download.fetcher import AssetFetcher
from assetloader.exceptions import InvalidLocationError


class CacheManager:
    """缓存管理器"""

    def __init__(
        self,
        store: LocalStore,
        fetcher: AssetFetcher,
        mapper: Optional[PathMapper] = None,
        deduplicate: bool = False,
        recursive_size: bool = True,
    ):
        self.store = store
        self.fetcher = fetcher
        self.mapper = mapper or PathMapper(store.root)
        self.deduplicate = deduplicate
        self.recursive_size = recursive_size
        self._inflight: Dict[Path, "asyncio.Task[Path]"] = {}

    def local_path(self, location: str) -> Path:
        """计算本地路径（不检查是否存在）"""
        return self.mapper.derive(location)

    def is_cached(self, location: str) -> bool:
        """资源是否已缓存，地址无效时返回 False"""
        return self.cached_path(location) is not None

    def cached_path(self, location: str) -> Optional[Path]:
        """已缓存时返回本地路径，否则返回 None"""
        try:
            path = self.mapper.derive(location)
        except InvalidLocationError:
            return None
        return path if self.store.exists(path) else None

    async def get_asset(self, location: str) -> Path:
        """
        获取资源的本地路径，必要时下载

        同一地址在首次成功后再次调用只做本地检查，不产生网络请求。
        下载或写入的异常原样抛出。
        """
        path = self.mapper.derive(location)

        if self.store.exists(path):
            logger.debug(f"[命中] 本地已存在: {path}")
            return path

        if not self.deduplicate:
            return await self._fetch_and_store(location, path)

        task = self._inflight.get(path)
        if task is None:
            task = asyncio.ensure_future(self._fetch_and_store(location, path))
            self._inflight[path] = task
            task.add_done_callback(lambda done, key=path: self._forget(key, done))
        else:
            logger.debug(f"[合并] 等待进行中的下载: {path}")
        return await asyncio.shield(task)

    def _forget(self, path: Path, task: "asyncio.Task[Path]") -> None:
        if self._inflight.get(path) is task:
            del self._inflight[path]
        # 标记异常已读取
        if not task.cancelled():
            task.exception()

    async def _fetch_and_store(self, location: str, path: Path) -> Path:
        data = await self.fetcher.fetch(location)
        # 外部取消时让正在进行的写入完成
        await asyncio.shield(self.store.write(path, data))
        logger.success(f"[完成] 已缓存: {path.name}")
        return path

    def clear_cache(self) -> None:
        """清空全部缓存"""
        self.store.clear_all()

    def cache_size(self) -> int:
        """缓存总字节数"""
        return self.store.total_size(recursive=self.recursive_size)
