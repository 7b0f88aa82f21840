"""
资源下载器

对单个资源发起一次 HTTP 请求并校验响应状态，不做重试。
"""

import asyncio
from typing import Dict, Optional
from urllib.parse import urlsplit

import aiohttp
from loguru import logger

from assetloader.exceptions import (
    DownloadFailedError,
    InvalidLocationError,
    NetworkError,
)


class AssetFetcher:
    """单资源下载器"""

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = 30.0,
        headers: Optional[Dict[str, str]] = None,
    ):
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

    @staticmethod
    def _validate(location: str) -> None:
        try:
            parts = urlsplit(location)
        except ValueError as e:
            raise InvalidLocationError(location, f"URL 解析失败 ({e})") from e
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise InvalidLocationError(location, "不是可下载的 http(s) URL")

    async def fetch(self, location: str) -> bytes:
        """
        下载资源内容

        Args:
            location: 资源的绝对 URL

        Returns:
            响应体字节

        Raises:
            InvalidLocationError: 地址无法解析
            DownloadFailedError: 状态码不在 200-299
            NetworkError: 传输层错误
        """
        self._validate(location)

        logger.info(f"[下载] 开始: {location}")
        try:
            async with self.session.get(location) as response:
                if not 200 <= response.status < 300:
                    raise DownloadFailedError(location, response.status)
                data = await response.read()
        except (aiohttp.InvalidURL, ValueError) as e:
            raise InvalidLocationError(location, f"URL 无法请求 ({e})") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(
                f"网络错误: {e}",
                context={"location": location, "error": repr(e)},
                cause=e,
            ) from e

        logger.debug(f"[下载] 完成: {location} ({len(data)} 字节)")
        return data

    async def close(self):
        """关闭下载器"""
        if self._owned_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
