"""
AssetLoader 下载层

单资源下载。
"""

from assetloader.download.fetcher import AssetFetcher

__all__ = [
    "AssetFetcher",
]
