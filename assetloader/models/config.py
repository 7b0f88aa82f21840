"""
配置模型

定义 AssetLoader 运行配置，支持从字典和配置文件加载。
"""

import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict

import toml
import yaml

from assetloader.exceptions import (
    ConfigError,
    ConfigParseError,
    ConfigValidationError,
)


DEFAULT_BASE_URL = "https://your-custom-api.com/api"
DEFAULT_CACHE_DIR = os.path.join("~", ".cache", "assetloader")


@dataclass
class AssetLoaderConfig:
    """AssetLoader 配置"""

    base_url: str = DEFAULT_BASE_URL
    cache_dir: str = DEFAULT_CACHE_DIR
    timeout: float = 30.0
    headers: Dict[str, str] = field(default_factory=dict)
    deduplicate: bool = False
    recursive_size: bool = True
    debug: bool = False

    def __post_init__(self):
        self._validate()

    def _validate(self):
        """验证配置"""
        if not isinstance(self.base_url, str) or not self.base_url:
            raise ConfigValidationError("base_url 必须为非空字符串")
        if not isinstance(self.cache_dir, (str, os.PathLike)) or not str(
            self.cache_dir
        ):
            raise ConfigValidationError("cache_dir 必须为非空路径")
        if isinstance(self.timeout, bool) or not isinstance(
            self.timeout, (int, float)
        ):
            raise ConfigValidationError("timeout 必须为数字")
        if self.timeout <= 0:
            raise ConfigValidationError(
                "timeout 必须大于 0", context={"timeout": self.timeout}
            )
        if not isinstance(self.headers, dict) or not all(
            isinstance(k, str) and isinstance(v, str)
            for k, v in self.headers.items()
        ):
            raise ConfigValidationError("headers 必须为字符串到字符串的映射")
        for name in ("deduplicate", "recursive_size", "debug"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigValidationError(f"{name} 必须为布尔值")

    @property
    def cache_root(self) -> Path:
        """展开后的缓存根目录"""
        return Path(os.path.expandvars(str(self.cache_dir))).expanduser()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AssetLoaderConfig":
        """从字典创建配置"""
        if not isinstance(data, dict):
            raise ConfigValidationError("配置必须为字典")

        # 兼容 [assetloader] 段落写法
        if isinstance(data.get("assetloader"), dict):
            data = data["assetloader"]

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(
                f"未知的配置项: {', '.join(unknown)}", context={"keys": unknown}
            )
        return cls(**data)

    @classmethod
    def from_file(cls, config_path: str) -> "AssetLoaderConfig":
        """加载配置文件（toml / json / yaml）"""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"配置文件不存在: {config_path}")

        suffix = path.suffix.lower()
        try:
            if suffix == ".toml":
                data = toml.load(str(path))
            elif suffix == ".json":
                data = json.loads(path.read_text(encoding="utf-8"))
            elif suffix in (".yaml", ".yml"):
                data = yaml.safe_load(path.read_text(encoding="utf-8"))
            else:
                raise ConfigError(f"不支持的配置文件格式: {suffix}")
        except (toml.TomlDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigParseError(
                f"配置文件解析失败: {e}", context={"path": str(path)}, cause=e
            ) from e

        return cls.from_dict(data or {})

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
