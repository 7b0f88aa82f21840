"""
CLI 模块

命令行接口实现。
"""

import asyncio
import sys
from typing import Optional

import click
from loguru import logger

from assetloader.cache import CacheManager, FileSystemStore
from assetloader.core import AssetLoader
from assetloader.download import AssetFetcher
from assetloader.exceptions import AssetLoaderError
from assetloader.logger import setup_logger
from assetloader.models import AssetLoaderConfig, Manifest
from assetloader.orchestrator import DownloadCallbacks, OrchestrationState
from assetloader.utils import format_size


def build_config(
    config_path: Optional[str],
    base_url: Optional[str],
    cache_dir: Optional[str],
    debug: bool,
) -> AssetLoaderConfig:
    """合并配置文件与命令行参数"""
    data = {}
    if config_path:
        data = AssetLoaderConfig.from_file(config_path).to_dict()
    if base_url:
        data["base_url"] = base_url
    if cache_dir:
        data["cache_dir"] = cache_dir
    if debug:
        data["debug"] = True
    return AssetLoaderConfig.from_dict(data)


def local_cache(config: AssetLoaderConfig) -> CacheManager:
    """只操作本地缓存的管理器，不创建缓存根目录"""
    return CacheManager(
        FileSystemStore(config.cache_root),
        AssetFetcher(timeout=config.timeout, headers=config.headers),
        recursive_size=config.recursive_size,
    )


def _make_callbacks() -> DownloadCallbacks:
    def on_manifest_loaded(manifest: Manifest):
        click.echo(
            f"清单 {manifest.identifier} ({manifest.kind} v{manifest.version}): "
            f"{len(manifest.assets)} 个资源"
        )

    def on_progress(total: int, cached: int, name: str):
        click.echo(f"  [{cached}/{total}] {name}")

    def on_asset_not_found(location: str):
        click.echo(f"  [缺失] {location}", err=True)

    def on_error(error: BaseException):
        click.echo(f"  [错误] {error}", err=True)

    return DownloadCallbacks(
        on_manifest_loaded=on_manifest_loaded,
        on_progress=on_progress,
        on_asset_not_found=on_asset_not_found,
        on_error=on_error,
    )


async def run_fetch(config: AssetLoaderConfig, identifier: str) -> int:
    """异步运行批量下载，返回退出码"""
    async with AssetLoader(config) as loader:
        summary = await loader.download_with_progress(identifier, _make_callbacks())

    if summary.state == OrchestrationState.FAILED:
        return 1

    click.echo(
        f"完成: 尝试 {summary.attempted}, 成功 {summary.cached}, 失败 {summary.failed}"
    )
    return 0


@click.group()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="配置文件 (toml/json/yaml)",
)
@click.option("--base-url", help="清单 API 地址")
@click.option("--cache-dir", help="缓存根目录")
@click.option("--debug", is_flag=True, help="启用调试模式")
@click.version_option(version="0.1.0")
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Optional[str],
    base_url: Optional[str],
    cache_dir: Optional[str],
    debug: bool,
):
    """AssetLoader - 资源清单下载与缓存工具"""
    try:
        config = build_config(config_path, base_url, cache_dir, debug)
    except AssetLoaderError as e:
        raise click.ClickException(str(e))

    setup_logger(debug=config.debug)
    logger.debug(f"配置: {config.to_dict()}")
    ctx.obj = config


@main.command()
@click.argument("identifier")
@click.pass_obj
def fetch(config: AssetLoaderConfig, identifier: str):
    """下载清单中的全部资源"""
    try:
        code = asyncio.run(run_fetch(config, identifier))
    except AssetLoaderError as e:
        raise click.ClickException(str(e))
    sys.exit(code)


@main.command()
@click.pass_obj
def clear(config: AssetLoaderConfig):
    """清空缓存"""
    try:
        local_cache(config).clear_cache()
    except AssetLoaderError as e:
        raise click.ClickException(str(e))
    click.echo(f"已清空缓存: {config.cache_root}")


@main.command()
@click.pass_obj
def size(config: AssetLoaderConfig):
    """显示缓存大小"""
    try:
        total = local_cache(config).cache_size()
    except AssetLoaderError as e:
        raise click.ClickException(str(e))
    click.echo(f"{total} ({format_size(total)})")


@main.command()
@click.argument("location")
@click.pass_obj
def status(config: AssetLoaderConfig, location: str):
    """检查单个资源是否已缓存"""
    try:
        path = local_cache(config).cached_path(location)
    except AssetLoaderError as e:
        raise click.ClickException(str(e))
    if path is None:
        click.echo("未缓存")
        sys.exit(1)
    click.echo(str(path))


if __name__ == "__main__":
    main()
