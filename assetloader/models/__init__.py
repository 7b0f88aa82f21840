"""
AssetLoader 数据模型包

包含配置模型和清单模型定义。
"""

from assetloader.models.config import (
    AssetLoaderConfig,
    DEFAULT_BASE_URL,
    DEFAULT_CACHE_DIR,
)
from assetloader.models.manifest import Manifest

__all__ = [
    # 配置模型
    "AssetLoaderConfig",
    "DEFAULT_BASE_URL",
    "DEFAULT_CACHE_DIR",
    # 清单模型
    "Manifest",
]
