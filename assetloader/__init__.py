"""
AssetLoader

按清单把远程资源下载到以 URL 路径寻址的本地缓存中。
"""

from assetloader.cache import CacheManager, FileSystemStore, MemoryStore, PathMapper
from assetloader.core import AssetLoader
from assetloader.download import AssetFetcher
from assetloader.models import AssetLoaderConfig, Manifest
from assetloader.orchestrator import (
    BatchDownloadOrchestrator,
    DownloadCallbacks,
    DownloadSummary,
    OrchestrationState,
)
from assetloader.services import ManifestClient

__version__ = "0.1.0"

__all__ = [
    "AssetLoader",
    "AssetLoaderConfig",
    "Manifest",
    "PathMapper",
    "FileSystemStore",
    "MemoryStore",
    "CacheManager",
    "AssetFetcher",
    "ManifestClient",
    "BatchDownloadOrchestrator",
    "DownloadCallbacks",
    "DownloadSummary",
    "OrchestrationState",
]
