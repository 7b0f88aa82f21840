from click.testing import CliRunner

from assetloader import cli
from assetloader.core import AssetLoader
from assetloader.exceptions import ManifestHTTPError
from assetloader.models import Manifest
from fakes import FakeFetcher, FakeManifestSource

A_PNG = "https://cdn.example.com/pkg/a.png"
B_PNG = "https://cdn.example.com/pkg/b.png"


def _patch_loader(monkeypatch, source) -> FakeFetcher:
    fetcher = FakeFetcher({A_PNG: b"png"})

    def factory(config):
        return AssetLoader(config, manifest_source=source, fetcher=fetcher)

    monkeypatch.setattr(cli, "AssetLoader", factory)
    return fetcher


def test_fetch_reports_progress_and_summary(tmp_path, monkeypatch) -> None:
    manifest = Manifest(identifier="m1", kind="appix", version=1, assets=(A_PNG, B_PNG))
    _patch_loader(monkeypatch, FakeManifestSource(manifest))

    result = CliRunner().invoke(cli.main, ["--cache-dir", str(tmp_path), "fetch", "m1"])

    assert result.exit_code == 0, result.output
    assert "[1/2] a.png" in result.output
    assert B_PNG in result.output
    assert "失败 1" in result.output
    assert (tmp_path / "pkg" / "a.png").read_bytes() == b"png"


def test_fetch_exits_non_zero_when_manifest_fails(tmp_path, monkeypatch) -> None:
    _patch_loader(monkeypatch, FakeManifestSource(error=ManifestHTTPError(404)))

    result = CliRunner().invoke(cli.main, ["--cache-dir", str(tmp_path), "fetch", "m1"])

    assert result.exit_code == 1


def test_status_size_and_clear(tmp_path) -> None:
    (tmp_path / "pkg").mkdir()
    (tmp_path / "pkg" / "a.png").write_bytes(b"12345")
    runner = CliRunner()
    base = ["--cache-dir", str(tmp_path)]

    cached = runner.invoke(cli.main, base + ["status", A_PNG])
    missing = runner.invoke(cli.main, base + ["status", B_PNG])
    size = runner.invoke(cli.main, base + ["size"])
    cleared = runner.invoke(cli.main, base + ["clear"])
    after = runner.invoke(cli.main, base + ["size"])

    assert cached.exit_code == 0
    assert str(tmp_path / "pkg" / "a.png") in cached.output
    assert missing.exit_code == 1
    assert size.output.startswith("5 ")
    assert cleared.exit_code == 0
    assert after.output.startswith("0 ")
    assert list(tmp_path.iterdir()) == []


def test_invalid_config_is_reported(tmp_path) -> None:
    config = tmp_path / "config.toml"
    config.write_text("timeout = -1\n", encoding="utf-8")

    result = CliRunner().invoke(cli.main, ["-c", str(config), "size"])

    assert result.exit_code != 0
    assert "E102" in result.output


def test_read_only_commands_do_not_create_cache_dir(tmp_path) -> None:
    cache_dir = tmp_path / "missing"
    runner = CliRunner()
    base = ["--cache-dir", str(cache_dir)]

    size = runner.invoke(cli.main, base + ["size"])
    status = runner.invoke(cli.main, base + ["status", A_PNG])
    cleared = runner.invoke(cli.main, base + ["clear"])

    assert size.exit_code == 0
    assert size.output.startswith("0 ")
    assert status.exit_code == 1
    assert cleared.exit_code == 0
    assert not cache_dir.exists()
