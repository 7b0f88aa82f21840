"""
AssetLoader 服务层

包含清单 API 客户端。
"""

from assetloader.services.api_client import ManifestClient, ManifestSource

__all__ = [
    "ManifestClient",
    "ManifestSource",
]
