"""
本地存储

缓存条目即缓存根目录下的普通文件，文件系统本身就是索引，没有额外的元数据。
"""

import os
import shutil
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Union

import aiofiles
from loguru import logger

from assetloader.exceptions import (
    ClearFailedError,
    ReadFailedError,
    WriteFailedError,
)


TMP_PREFIX = "."
TMP_SUFFIX = ".part"


def is_temp_file(name: str) -> bool:
    """写入过程中使用的临时文件名"""
    return name.startswith(TMP_PREFIX) and name.endswith(TMP_SUFFIX)


class LocalStore(ABC):
    """本地存储接口，所有路径均位于 root 之下"""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """路径处是否存在普通文件，不抛出异常"""
        pass

    @abstractmethod
    async def read(self, path: Path) -> bytes:
        """读取文件内容"""
        pass

    @abstractmethod
    async def write(self, path: Path, data: bytes) -> None:
        """写入文件，自动创建父目录"""
        pass

    @abstractmethod
    def clear_all(self) -> None:
        """删除缓存根目录下的所有内容"""
        pass

    @abstractmethod
    def total_size(self, recursive: bool = True) -> int:
        """缓存文件总字节数"""
        pass

    def ensure_root(self) -> None:
        """创建缓存根目录"""
        pass


class FileSystemStore(LocalStore):
    """基于文件系统的存储"""

    def ensure_root(self) -> None:
        try:
            os.makedirs(self.root, exist_ok=True)
        except OSError as e:
            raise WriteFailedError(
                f"无法创建缓存目录: {self.root}",
                context={"path": str(self.root), "error": str(e)},
                cause=e,
            ) from e

    def exists(self, path: Path) -> bool:
        # isfile 对无权限或不存在的路径返回 False
        return os.path.isfile(path)

    async def read(self, path: Path) -> bytes:
        try:
            async with aiofiles.open(path, "rb") as f:
                return await f.read()
        # 路径含空字符时抛出 ValueError
        except (OSError, ValueError) as e:
            raise ReadFailedError(
                f"读取缓存文件失败: {path}",
                context={"path": str(path), "error": str(e)},
                cause=e,
            ) from e

    async def write(self, path: Path, data: bytes) -> None:
        path = Path(path)
        # 同一路径可能被并发写入，每个写入者使用独立的临时文件；
        # 临时文件名长度固定，与目标文件名无关
        tmp_path = path.parent / f"{TMP_PREFIX}{uuid.uuid4().hex}{TMP_SUFFIX}"
        try:
            os.makedirs(path.parent, exist_ok=True)
            async with aiofiles.open(tmp_path, "wb") as f:
                await f.write(data)
            os.replace(tmp_path, path)
        except (OSError, ValueError) as e:
            if os.path.lexists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError:
                    logger.warning(f"[清理] 无法删除临时文件: {tmp_path}")
            raise WriteFailedError(
                f"写入缓存文件失败: {path}",
                context={"path": str(path), "error": str(e)},
                cause=e,
            ) from e
        logger.debug(f"[写入] {path} ({len(data)} 字节)")

    def clear_all(self) -> None:
        if not self.root.exists():
            return

        try:
            entries = list(os.scandir(self.root))
        except OSError as e:
            raise ClearFailedError(
                f"无法列出缓存目录: {self.root}",
                context={"path": str(self.root), "error": str(e)},
                cause=e,
            ) from e

        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    shutil.rmtree(entry.path)
                else:
                    os.remove(entry.path)
            except OSError as e:
                raise ClearFailedError(
                    f"删除缓存条目失败: {entry.path}",
                    context={"path": entry.path, "error": str(e)},
                    cause=e,
                ) from e

        logger.info(f"[清理] 已清空缓存目录: {self.root} ({len(entries)} 项)")

    def total_size(self, recursive: bool = True) -> int:
        if not self.root.exists():
            return 0

        try:
            if not recursive:
                # 只统计根目录下的直接文件
                return sum(
                    entry.stat().st_size
                    for entry in os.scandir(self.root)
                    if entry.is_file(follow_symlinks=False)
                    and not is_temp_file(entry.name)
                )

            total = 0
            for dirpath, _, filenames in os.walk(self.root):
                for filename in filenames:
                    if is_temp_file(filename):
                        continue
                    file_path = os.path.join(dirpath, filename)
                    if not os.path.islink(file_path):
                        total += os.path.getsize(file_path)
            return total
        except OSError as e:
            raise ReadFailedError(
                f"统计缓存大小失败: {self.root}",
                context={"path": str(self.root), "error": str(e)},
                cause=e,
            ) from e


class MemoryStore(LocalStore):
    """内存存储，用于测试或不落盘的场景"""

    def __init__(self, root: Union[str, Path] = "/cache"):
        super().__init__(root)
        self.files: Dict[Path, bytes] = {}

    def exists(self, path: Path) -> bool:
        return Path(path) in self.files

    async def read(self, path: Path) -> bytes:
        try:
            return self.files[Path(path)]
        except KeyError as e:
            raise ReadFailedError(
                f"缓存文件不存在: {path}", context={"path": str(path)}, cause=e
            ) from e

    async def write(self, path: Path, data: bytes) -> None:
        self.files[Path(path)] = bytes(data)

    def clear_all(self) -> None:
        self.files.clear()

    def total_size(self, recursive: bool = True) -> int:
        return sum(
            len(data)
            for path, data in self.files.items()
            if recursive or path.parent == self.root
        )
