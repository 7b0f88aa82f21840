"""
批量下载协调器

获取清单后按顺序把每个资源交给缓存管理器，汇报进度并统计结果。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from loguru import logger

from assetloader.cache.manager import CacheManager
from assetloader.cache.paths import display_name
from assetloader.exceptions import AssetLoaderError, ErrorKind
from assetloader.models import Manifest
from assetloader.services.api_client import ManifestSource


class OrchestrationState(Enum):
    """单次调用的状态"""

    IDLE = "idle"
    FETCHING_MANIFEST = "fetching_manifest"
    ITERATING_ASSETS = "iterating_assets"
    COMPLETED = "completed"
    FAILED = "failed"


class Channel(Enum):
    """资源失败的上报通道"""

    NOT_FOUND = "not_found"
    ERROR = "error"


_NOT_FOUND_KINDS = {ErrorKind.INVALID_LOCATION, ErrorKind.DOWNLOAD_FAILED}

ASSET_ERROR_CHANNELS: Dict[ErrorKind, Channel] = {
    kind: Channel.NOT_FOUND if kind in _NOT_FOUND_KINDS else Channel.ERROR
    for kind in ErrorKind
}


def classify(error: BaseException) -> Channel:
    """把单个资源的异常归入一个上报通道"""
    if isinstance(error, AssetLoaderError):
        return ASSET_ERROR_CHANNELS[error.kind]
    return Channel.ERROR


@dataclass
class DownloadCallbacks:
    """
    协调器回调

    所有回调都在协调任务中按顺序调用，不会并发。
    """

    on_manifest_loaded: Optional[Callable[[Manifest], None]] = None
    on_progress: Optional[Callable[[int, int, str], None]] = None
    on_complete: Optional[Callable[[int, int, int], None]] = None
    on_asset_not_found: Optional[Callable[[str], None]] = None
    on_error: Optional[Callable[[BaseException], None]] = None


@dataclass
class DownloadSummary:
    """单次调用的结果"""

    state: OrchestrationState = OrchestrationState.IDLE
    manifest: Optional[Manifest] = None
    total: int = 0
    attempted: int = 0
    cached: int = 0
    failed: int = 0
    not_found: List[str] = field(default_factory=list)
    errors: List[BaseException] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.state == OrchestrationState.COMPLETED and self.failed == 0


class BatchDownloadOrchestrator:
    """批量下载协调器"""

    def __init__(self, manifest_source: ManifestSource, cache_manager: CacheManager):
        self.manifest_source = manifest_source
        self.cache_manager = cache_manager

    async def run(
        self, identifier: str, callbacks: Optional[DownloadCallbacks] = None
    ) -> DownloadSummary:
        """
        下载清单中的全部资源

        清单获取失败时进入 FAILED 并通过 on_error 上报；单个资源失败不会中断批次。
        本方法不会因清单或资源失败而抛出异常。

        Args:
            identifier: 清单标识
            callbacks: 回调集合，均为可选

        Returns:
            DownloadSummary
        """
        callbacks = callbacks or DownloadCallbacks()
        summary = DownloadSummary(state=OrchestrationState.FETCHING_MANIFEST)

        logger.info(f"[清单] 获取清单: {identifier}")
        try:
            manifest = await self.manifest_source.fetch(identifier)
        except Exception as e:
            summary.state = OrchestrationState.FAILED
            summary.errors.append(e)
            logger.error(f"[错误] 清单获取失败: {e}")
            if callbacks.on_error:
                callbacks.on_error(e)
            return summary

        summary.state = OrchestrationState.ITERATING_ASSETS
        summary.manifest = manifest
        if callbacks.on_manifest_loaded:
            callbacks.on_manifest_loaded(manifest)

        total = len(manifest.assets)
        cached = 0
        attempted = 0
        failed = 0
        summary.total = total

        for location in manifest.assets:
            attempted += 1
            summary.attempted = attempted
            try:
                await self.cache_manager.get_asset(location)
            except Exception as e:
                failed += 1
                summary.failed = failed
                self._report_failure(location, e, summary, callbacks)
                continue

            cached += 1
            summary.cached = cached
            name = display_name(location)
            logger.info(f"[进度] {name} ({cached}/{total})")
            if callbacks.on_progress:
                callbacks.on_progress(total, cached, name)

        summary.state = OrchestrationState.COMPLETED
        logger.success(
            f"[完成] 尝试 {attempted} 个, 成功 {cached} 个, 失败 {failed} 个"
        )
        if callbacks.on_complete:
            callbacks.on_complete(attempted, cached, failed)
        return summary

    @staticmethod
    def _report_failure(
        location: str,
        error: Exception,
        summary: DownloadSummary,
        callbacks: DownloadCallbacks,
    ) -> None:
        channel = classify(error)
        if channel is Channel.NOT_FOUND:
            summary.not_found.append(location)
            logger.warning(f"[缺失] 资源不存在: {location} ({error})")
            if callbacks.on_asset_not_found:
                callbacks.on_asset_not_found(location)
        else:
            summary.errors.append(error)
            logger.warning(f"[错误] 资源处理失败: {location} ({error})")
            if callbacks.on_error:
                callbacks.on_error(error)
