"""
清单数据模型

描述一个资源包：标识、类型、版本以及有序的资源地址列表。
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from assetloader.exceptions import ManifestDecodingError


@dataclass(frozen=True)
class Manifest:
    """
    资源清单。

    assets 保持服务端返回的顺序，仅用于进度汇报。
    """

    identifier: str
    kind: str
    version: int
    assets: Tuple[str, ...]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Manifest":
        """
        将清单 API 返回的 JSON 对象转换为 Manifest 对象。
        """
        try:
            identifier = data["id"]
            kind = data["type"]
            version = data["version"]
            assets = data["assets"]
        except KeyError as e:
            raise ManifestDecodingError(
                f"清单缺少字段: {e.args[0]}", context={"field": e.args[0]}
            ) from e

        if not isinstance(identifier, str):
            raise ManifestDecodingError("清单字段 id 必须为字符串")
        if not isinstance(kind, str):
            raise ManifestDecodingError("清单字段 type 必须为字符串")
        # bool 是 int 的子类
        if isinstance(version, bool) or not isinstance(version, int):
            raise ManifestDecodingError("清单字段 version 必须为整数")
        if not isinstance(assets, list) or not all(
            isinstance(asset, str) for asset in assets
        ):
            raise ManifestDecodingError("清单字段 assets 必须为字符串列表")

        return cls(
            identifier=identifier,
            kind=kind,
            version=version,
            assets=tuple(assets),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.identifier,
            "type": self.kind,
            "version": self.version,
            "assets": list(self.assets),
        }
