import sys

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def reset_logger():
    """CLI 测试会把日志输出重定向到 CliRunner 的流，每个测试后恢复"""
    yield
    logger.remove()
    logger.add(sys.stderr, level="DEBUG")
