import json
from pathlib import Path

import pytest

from assetloader.exceptions import ConfigError, ConfigParseError, ConfigValidationError
from assetloader.models import DEFAULT_BASE_URL, AssetLoaderConfig


def test_defaults() -> None:
    config = AssetLoaderConfig()

    assert config.base_url == DEFAULT_BASE_URL
    assert config.timeout == 30.0
    assert config.deduplicate is False
    assert config.recursive_size is True
    assert config.cache_root == Path.home() / ".cache" / "assetloader"


def test_from_dict_unwraps_section_and_validates() -> None:
    config = AssetLoaderConfig.from_dict(
        {"assetloader": {"base_url": "https://example.com/api", "timeout": 5}}
    )

    assert config.base_url == "https://example.com/api"
    assert config.timeout == 5


@pytest.mark.parametrize(
    "data",
    [
        {"unknown": 1},
        {"timeout": 0},
        {"timeout": "fast"},
        {"timeout": True},
        {"base_url": ""},
        {"headers": {"X-Token": 1}},
        {"deduplicate": "yes"},
    ],
)
def test_from_dict_rejects_bad_values(data) -> None:
    with pytest.raises(ConfigValidationError) as excinfo:
        AssetLoaderConfig.from_dict(data)

    assert excinfo.value.code == "E102"


@pytest.mark.parametrize(
    "name,content",
    [
        ("config.toml", 'base_url = "https://example.com/api"\ncache_dir = "CACHE"\n'),
        ("config.json", json.dumps({"base_url": "https://example.com/api", "cache_dir": "CACHE"})),
        ("config.yaml", "base_url: https://example.com/api\ncache_dir: CACHE\n"),
    ],
)
def test_from_file_formats(tmp_path, name, content) -> None:
    cache_dir = tmp_path / "cache"
    path = tmp_path / name
    path.write_text(content.replace("CACHE", cache_dir.as_posix()), encoding="utf-8")

    config = AssetLoaderConfig.from_file(str(path))

    assert config.base_url == "https://example.com/api"
    assert config.cache_root == cache_dir


def test_from_file_errors(tmp_path) -> None:
    broken = tmp_path / "broken.toml"
    broken.write_text("base_url = ", encoding="utf-8")
    unknown = tmp_path / "config.ini"
    unknown.write_text("", encoding="utf-8")

    with pytest.raises(ConfigParseError):
        AssetLoaderConfig.from_file(str(broken))
    with pytest.raises(ConfigError):
        AssetLoaderConfig.from_file(str(unknown))
    with pytest.raises(ConfigError):
        AssetLoaderConfig.from_file(str(tmp_path / "missing.toml"))


def test_empty_yaml_uses_defaults(tmp_path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert AssetLoaderConfig.from_file(str(path)) == AssetLoaderConfig()
