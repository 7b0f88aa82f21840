import io

from loguru import logger

from assetloader.logger import DEBUG_ENV, resolve_level, setup_logger


def test_resolve_level_priority(monkeypatch) -> None:
    monkeypatch.delenv(DEBUG_ENV, raising=False)
    assert resolve_level() == "INFO"
    assert resolve_level(debug=True) == "DEBUG"
    assert resolve_level("warning", debug=True) == "WARNING"

    monkeypatch.setenv(DEBUG_ENV, "1")
    assert resolve_level() == "DEBUG"
    assert resolve_level("ERROR") == "ERROR"

    monkeypatch.setenv(DEBUG_ENV, "0")
    assert resolve_level() == "INFO"


def test_setup_logger_filters_below_level(monkeypatch) -> None:
    monkeypatch.delenv(DEBUG_ENV, raising=False)
    sink = io.StringIO()

    level = setup_logger(sink=sink, colorize=False)
    logger.debug("hidden")
    logger.info("[下载] shown")

    assert level == "INFO"
    output = sink.getvalue()
    assert "hidden" not in output
    assert "| INFO     | [下载] shown" in output


def test_setup_logger_debug_uses_detailed_format(monkeypatch) -> None:
    monkeypatch.delenv(DEBUG_ENV, raising=False)
    sink = io.StringIO()

    level = setup_logger(debug=True, sink=sink, colorize=False)
    logger.debug("details")

    assert level == "DEBUG"
    output = sink.getvalue()
    assert "DEBUG 模式已启用" in output
    assert ":test_setup_logger_debug_uses_detailed_format:" in output
