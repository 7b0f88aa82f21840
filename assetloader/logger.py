"""
日志模块

使用 loguru 提供统一的日志记录功能。日志默认写到 stderr，stdout 留给命令输出。
"""

import os
import sys
from typing import Optional

from loguru import logger

DEBUG_ENV = "ASSETLOADER_DEBUG"

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}"
DEBUG_LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}"
)


def resolve_level(level: Optional[str] = None, debug: bool = False) -> str:
    """
    决定日志级别

    优先级: 显式 level > debug 参数 > ASSETLOADER_DEBUG 环境变量 > INFO
    """
    if level:
        return level.upper()
    if debug or os.environ.get(DEBUG_ENV, "0") == "1":
        return "DEBUG"
    return "INFO"


def setup_logger(
    level: Optional[str] = None,
    debug: bool = False,
    sink=None,
    enqueue: bool = False,
    colorize: Optional[bool] = None,
) -> str:
    """
    设置日志记录器

    Args:
        level: 日志级别 (DEBUG, INFO, WARNING, ERROR)
        debug: 是否启用调试模式（配置项 debug / --debug）
        sink: 输出目标，默认 sys.stderr
        enqueue: 是否启用队列（线程安全）
        colorize: 是否启用颜色，None 时由 loguru 根据终端判断

    Returns:
        实际使用的日志级别
    """
    level = resolve_level(level, debug)
    is_debug = level == "DEBUG"

    logger.remove()

    logger.add(
        sink=sink if sink is not None else sys.stderr,
        format=DEBUG_LOG_FORMAT if is_debug else LOG_FORMAT,
        enqueue=enqueue,
        level=level,
        colorize=colorize,
        backtrace=is_debug,
        diagnose=is_debug,
    )

    if is_debug:
        logger.debug("DEBUG 模式已启用")
    return level


__all__ = ["logger", "setup_logger", "resolve_level", "DEBUG_ENV"]
