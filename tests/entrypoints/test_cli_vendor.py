import pytest
from typer.testing import CliRunner

from packrender.entrypoints.cli import app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("PACKRENDER_CONFIG", str(tmp_path / "no-config.toml"))
    monkeypatch.setenv("PACKRENDER_CACHE_DIR", str(tmp_path / "cache"))


def test_cli_vendor_copies_pack(simple_pack, tmp_path):
    runner = CliRunner()
    result = runner.invoke(app, ["vendor", str(simple_pack), "--registry", "community"])
    assert result.exit_code == 0
    assert (tmp_path / "cache" / "community" / "hello@latest" / "pack.yaml").exists()
    assert "Vendored pack to" in result.output


def test_cli_vendor_twice_fails(simple_pack):
    runner = CliRunner()
    assert runner.invoke(app, ["vendor", str(simple_pack)]).exit_code == 0
    second = runner.invoke(app, ["vendor", str(simple_pack)])
    assert second.exit_code == 1
    assert "destination already exists" in second.output


def test_cli_broken_config(simple_pack, tmp_path, monkeypatch):
    config = tmp_path / "broken.toml"
    config.write_text("[cache\n")
    monkeypatch.setenv("PACKRENDER_CONFIG", str(config))
    runner = CliRunner()
    result = runner.invoke(app, ["vendor", str(simple_pack)])
    assert result.exit_code == 1
