"""
AssetLoader 缓存层

包含路径映射、本地存储和缓存管理。
"""

from assetloader.cache.paths import PathMapper, display_name
from assetloader.cache.store import LocalStore, FileSystemStore, MemoryStore
from assetloader.cache.manager import CacheManager

__all__ = [
    "PathMapper",
    "display_name",
    "LocalStore",
    "FileSystemStore",
    "MemoryStore",
    "CacheManager",
]
