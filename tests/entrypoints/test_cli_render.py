import pytest
from typer.testing import CliRunner

from packrender.entrypoints.cli import app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("PACKRENDER_CONFIG", str(tmp_path / "no-config.toml"))
    monkeypatch.setenv("PACKRENDER_CACHE_DIR", str(tmp_path / "cache"))


def test_cli_render_to_terminal(simple_pack):
    runner = CliRunner()
    result = runner.invoke(app, ["render", str(simple_pack)])
    assert result.exit_code == 0
    out = result.output
    assert out.index("hello/redis/redis.nomad:") < out.index("hello/hello.nomad:")
    assert out.index("hello/hello.nomad:") < out.index("hello/zeta.nomad:")
    assert 'job "hello" { count = 1 }' in out


def test_cli_render_with_vars_and_outputs(simple_pack, tmp_path):
    var_file = tmp_path / "overrides.yaml"
    var_file.write_text("count: 5\n")
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "render",
            str(simple_pack),
            "--var-file",
            str(var_file),
            "--var",
            "job_name=api",
            "--render-output-template",
        ],
    )
    assert result.exit_code == 0
    assert 'job "api" { count = 5 }' in result.output
    assert "outputs.tpl:" in result.output


def test_cli_render_to_dir(simple_pack, tmp_path):
    out = tmp_path / "out"
    runner = CliRunner()
    result = runner.invoke(app, ["render", str(simple_pack), "-o", str(out)])
    assert result.exit_code == 0
    assert (out / "hello" / "hello.nomad").exists()
    assert (out / "hello" / "redis" / "redis.nomad").exists()


def test_cli_existing_file_is_kept_without_auto_approve(simple_pack, tmp_path):
    out = tmp_path / "out"
    existing = out / "hello" / "hello.nomad"
    existing.parent.mkdir(parents=True)
    existing.write_text("keep")
    runner = CliRunner()
    result = runner.invoke(app, ["render", str(simple_pack), "--to-dir", str(out)])
    assert result.exit_code == 0
    assert existing.read_text() == "keep"
    assert "error rendering to file" in result.output
    assert f"Destination File: {existing}" in result.output
    assert 'job "hello" { count = 1 }' in result.output
    assert (out / "hello" / "zeta.nomad").exists()


def test_cli_auto_approve_overwrites(simple_pack, tmp_path):
    out = tmp_path / "out"
    existing = out / "hello" / "hello.nomad"
    existing.parent.mkdir(parents=True)
    existing.write_text("old")
    runner = CliRunner()
    result = runner.invoke(app, ["render", str(simple_pack), "-o", str(out), "--auto-approve"])
    assert result.exit_code == 0
    assert existing.read_text() == 'job "hello" { count = 1 }\n'


def test_cli_ref_with_path_is_rejected(simple_pack):
    runner = CliRunner()
    result = runner.invoke(app, ["render", str(simple_pack), "--ref", "v1"])
    assert result.exit_code == 1
    assert "using ref with a file path is not supported" in result.output


def test_cli_pack_not_found():
    runner = CliRunner()
    result = runner.invoke(app, ["render", "does-not-exist"])
    assert result.exit_code == 1
    assert "failed to find pack" in result.output
    assert "Pack Name: does-not-exist" in result.output


def test_cli_to_dir_is_a_file(simple_pack, tmp_path):
    target = tmp_path / "file"
    target.write_text("")
    runner = CliRunner()
    result = runner.invoke(app, ["render", str(simple_pack), "-o", str(target)])
    assert result.exit_code == 1
    assert "output path exists and is not a directory" in result.output


def test_cli_bad_var(simple_pack):
    runner = CliRunner()
    result = runner.invoke(app, ["render", str(simple_pack), "--var", "oops"])
    assert result.exit_code == 1
    assert "Expected key=value" in result.output


def test_cli_no_templates(pack_factory, tmp_path):
    pack_dir = pack_factory(tmp_path, "empty", {"outputs.tpl": "out"})
    runner = CliRunner()
    result = runner.invoke(app, ["render", str(pack_dir), "--render-output-template"])
    assert result.exit_code == 1
    assert "no templates rendered" in result.output


def test_cli_render_from_registry_cache(simple_pack, tmp_path):
    runner = CliRunner()
    vendored = runner.invoke(app, ["vendor", str(simple_pack), "--ref", "v1"])
    assert vendored.exit_code == 0
    result = runner.invoke(app, ["render", "hello", "--ref", "v1"])
    assert result.exit_code == 0
    assert "hello/hello.nomad:" in result.output
