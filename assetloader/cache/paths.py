"""
路径映射

把远程资源地址映射为缓存根目录下的本地路径：去掉协议和主机，保留路径段。
"""

from pathlib import Path
from typing import List, Union
from urllib.parse import unquote, urlsplit

from assetloader.exceptions import InvalidLocationError


def _path_segments(location: str) -> List[str]:
    """解析绝对 URL 并返回非空路径段"""
    try:
        parts = urlsplit(location)
        # 访问 port 会校验端口格式
        parts.port
    except ValueError as e:
        raise InvalidLocationError(location, f"URL 解析失败 ({e})") from e

    if not parts.scheme or not parts.netloc:
        raise InvalidLocationError(location, "不是绝对 URL")

    return [unquote(segment) for segment in parts.path.split("/") if segment]


def display_name(location: str) -> str:
    """资源的简短显示名：最后一个路径段，无法提取时返回原始地址"""
    try:
        segments = _path_segments(location)
    except InvalidLocationError:
        segments = []
    return segments[-1] if segments else location


class PathMapper:
    """
    URL 到本地路径的映射器

    纯函数，不做任何 I/O。协议和主机不同但路径相同的地址会映射到同一路径。
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def derive(self, location: str) -> Path:
        """
        计算资源的本地缓存路径

        Args:
            location: 资源的绝对 URL

        Returns:
            <root>/<seg1>/.../<segN>

        Raises:
            InvalidLocationError: 地址不是合法的绝对 URL，或路径无法映射
        """
        segments = _path_segments(location)
        if not segments:
            raise InvalidLocationError(location, "URL 不包含文件路径")

        local_path = self.root
        for segment in segments:
            # 不允许跳出缓存根目录，也不允许空字符
            if (
                segment in (".", "..")
                or "/" in segment
                or "\\" in segment
                or "\x00" in segment
            ):
                raise InvalidLocationError(location, f"无法映射的路径段 '{segment}'")
            local_path = local_path / segment
        return local_path
