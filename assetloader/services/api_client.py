"""
清单 API 客户端

根据标识获取资源清单。
"""

import asyncio
import json
from abc import ABC, abstractmethod
from typing import Dict, Optional
from urllib.parse import quote, urlsplit

import aiohttp
from loguru import logger

from assetloader.models import DEFAULT_BASE_URL, Manifest
from assetloader.exceptions import (
    EmptyIdentifierError,
    InvalidManifestURLError,
    InvalidResponseError,
    ManifestDecodingError,
    ManifestHTTPError,
    ManifestNetworkError,
)


class ManifestSource(ABC):
    """清单来源"""

    @abstractmethod
    async def fetch(self, identifier: str) -> Manifest:
        """
        通过标识获取清单。
        """
        pass


class ManifestClient(ManifestSource):
    """清单 HTTP 客户端"""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = 30.0,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._session = session
        self._owned_session = session is None
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.headers = headers or {}

    @property
    def session(self) -> aiohttp.ClientSession:
        """获取或创建 aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self.timeout, headers=self.headers
            )
            self._owned_session = True
        return self._session

    def manifest_url(self, identifier: str) -> str:
        """构造清单请求地址"""
        url = f"{self.base_url}/downloads/{quote(identifier, safe='')}"
        try:
            parts = urlsplit(url)
        except ValueError as e:
            raise InvalidManifestURLError(
                f"无效的请求地址: {url}", context={"url": url}, cause=e
            ) from e
        if not parts.scheme or not parts.netloc:
            raise InvalidManifestURLError(
                f"无效的请求地址: {url}", context={"url": url}
            )
        return url

    async def fetch(self, identifier: str) -> Manifest:
        """
        获取清单

        Raises:
            EmptyIdentifierError: 标识为空
            InvalidManifestURLError: 请求地址无效
            ManifestHTTPError: 状态码不在 200-299
            InvalidResponseError: 响应不是 JSON 对象
            ManifestDecodingError: 响应无法解码为清单
            ManifestNetworkError: 传输层错误
        """
        if not identifier:
            raise EmptyIdentifierError("清单标识不能为空")

        url = self.manifest_url(identifier)
        logger.debug(f"[清单] 请求: {url}")

        try:
            async with self.session.get(
                url, headers={"Content-Type": "application/json"}
            ) as response:
                if not 200 <= response.status < 300:
                    raise ManifestHTTPError(response.status, str(response.url))
                body = await response.read()
        except aiohttp.InvalidURL as e:
            raise InvalidManifestURLError(
                f"无效的请求地址: {url}", context={"url": url}, cause=e
            ) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ManifestNetworkError(
                f"网络错误: {e}", context={"url": url, "error": repr(e)}, cause=e
            ) from e

        try:
            data = json.loads(body)
        except ValueError as e:
            raise ManifestDecodingError(
                f"清单解码失败: {e}", context={"url": url}, cause=e
            ) from e

        if not isinstance(data, dict):
            raise InvalidResponseError(
                "清单响应不是 JSON 对象",
                context={"url": url, "type": type(data).__name__},
            )

        manifest = Manifest.from_dict(data)
        logger.info(
            f"[清单] '{manifest.identifier}' ({manifest.kind} v{manifest.version}) "
            f"包含 {len(manifest.assets)} 个资源"
        )
        return manifest

    async def close(self):
        """关闭客户端"""
        if self._owned_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        """异步上下文管理器入口"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """异步上下文管理器出口"""
        await self.close()
