"""
AssetLoader 统一异常体系

提供分层的异常结构，支持错误代码、错误类别标签、上下文信息和 JSON 序列化。
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(Enum):
    """错误类别标签，各层边界按此分类"""

    CONFIG = "config"
    INVALID_LOCATION = "invalid_location"
    EMPTY_IDENTIFIER = "empty_identifier"
    INVALID_URL = "invalid_url"
    INVALID_RESPONSE = "invalid_response"
    HTTP_ERROR = "http_error"
    DECODING_ERROR = "decoding_error"
    NETWORK_ERROR = "network_error"
    DOWNLOAD_FAILED = "download_failed"
    READ_FAILED = "read_failed"
    WRITE_FAILED = "write_failed"
    CLEAR_FAILED = "clear_failed"


class AssetLoaderError(Exception):
    """AssetLoader 基础异常类"""

    kind: ErrorKind = ErrorKind.CONFIG

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self._get_default_code()
        self.context = context or {}
        self.cause = cause

    def _get_default_code(self) -> str:
        """获取默认错误代码"""
        return "E000"

    def to_dict(self) -> Dict[str, Any]:
        """将异常转换为字典格式"""
        return {
            "error": True,
            "code": self.code,
            "kind": self.kind.value,
            "message": self.message,
            "context": self.context,
            "type": self.__class__.__name__,
        }

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ConfigError(AssetLoaderError):
    """配置相关错误"""

    kind = ErrorKind.CONFIG

    def _get_default_code(self) -> str:
        return "E100"


class ConfigParseError(ConfigError):
    """配置解析错误"""

    def _get_default_code(self) -> str:
        return "E101"


class ConfigValidationError(ConfigError):
    """配置验证错误"""

    def _get_default_code(self) -> str:
        return "E102"


class InvalidLocationError(AssetLoaderError):
    """资源地址无效（不是绝对 URL 或无法映射到本地路径）"""

    kind = ErrorKind.INVALID_LOCATION

    def __init__(self, location: str, reason: str = "无效的资源地址"):
        super().__init__(f"{reason}: {location}", context={"location": location})
        self.location = location

    def _get_default_code(self) -> str:
        return "E110"


class ManifestError(AssetLoaderError):
    """清单 API 相关错误"""

    kind = ErrorKind.INVALID_RESPONSE

    def _get_default_code(self) -> str:
        return "E200"


class EmptyIdentifierError(ManifestError):
    """清单标识为空"""

    kind = ErrorKind.EMPTY_IDENTIFIER

    def _get_default_code(self) -> str:
        return "E201"


class InvalidManifestURLError(ManifestError):
    """清单请求 URL 构造失败"""

    kind = ErrorKind.INVALID_URL

    def _get_default_code(self) -> str:
        return "E202"


class InvalidResponseError(ManifestError):
    """服务器返回了无法识别的响应"""

    kind = ErrorKind.INVALID_RESPONSE

    def _get_default_code(self) -> str:
        return "E203"


class ManifestHTTPError(ManifestError):
    """清单请求返回非 2xx 状态码"""

    kind = ErrorKind.HTTP_ERROR

    def __init__(self, status: int, url: str = ""):
        super().__init__(
            f"HTTP 错误，状态码: {status}",
            context={"status_code": status, "url": url},
        )
        self.status = status

    def _get_default_code(self) -> str:
        return "E204"


class ManifestDecodingError(ManifestError):
    """清单内容解码失败"""

    kind = ErrorKind.DECODING_ERROR

    def _get_default_code(self) -> str:
        return "E205"


class ManifestNetworkError(ManifestError):
    """清单请求网络错误"""

    kind = ErrorKind.NETWORK_ERROR

    def _get_default_code(self) -> str:
        return "E206"


class DownloadError(AssetLoaderError):
    """下载相关错误"""

    kind = ErrorKind.DOWNLOAD_FAILED

    def _get_default_code(self) -> str:
        return "E300"


class DownloadFailedError(DownloadError):
    """资源下载返回非 2xx 状态码"""

    kind = ErrorKind.DOWNLOAD_FAILED

    def __init__(self, location: str, status: Optional[int] = None):
        super().__init__(
            f"资源下载失败 (状态码: {status}): {location}",
            context={"location": location, "status_code": status},
        )
        self.location = location
        self.status = status

    def _get_default_code(self) -> str:
        return "E301"


class NetworkError(DownloadError):
    """下载网络错误，包装底层传输异常"""

    kind = ErrorKind.NETWORK_ERROR

    def _get_default_code(self) -> str:
        return "E302"


class StorageError(AssetLoaderError):
    """本地存储相关错误"""

    kind = ErrorKind.WRITE_FAILED

    def _get_default_code(self) -> str:
        return "E400"


class ReadFailedError(StorageError):
    """读取缓存文件失败"""

    kind = ErrorKind.READ_FAILED

    def _get_default_code(self) -> str:
        return "E401"


class WriteFailedError(StorageError):
    """写入缓存文件失败"""

    kind = ErrorKind.WRITE_FAILED

    def _get_default_code(self) -> str:
        return "E402"


class ClearFailedError(StorageError):
    """清空缓存失败"""

    kind = ErrorKind.CLEAR_FAILED

    def _get_default_code(self) -> str:
        return "E403"


__all__ = [
    "ErrorKind",
    # 基础异常
    "AssetLoaderError",
    # 配置异常
    "ConfigError",
    "ConfigParseError",
    "ConfigValidationError",
    # 地址异常
    "InvalidLocationError",
    # 清单异常
    "ManifestError",
    "EmptyIdentifierError",
    "InvalidManifestURLError",
    "InvalidResponseError",
    "ManifestHTTPError",
    "ManifestDecodingError",
    "ManifestNetworkError",
    # 下载异常
    "DownloadError",
    "DownloadFailedError",
    "NetworkError",
    # 存储异常
    "StorageError",
    "ReadFailedError",
    "WriteFailedError",
    "ClearFailedError",
]
