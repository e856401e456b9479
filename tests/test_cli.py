import pytest
from typer.testing import CliRunner

from syskit.core.runner import execute_operation
from syskit.core.settings import AppSettings
from syskit.main import app
from syskit.tasks import files

runner = CliRunner()


@pytest.fixture
def config(tmp_path):
    path = tmp_path / "syskit.yaml"
    path.write_text(f"inventory_file: {tmp_path / 'hosts.yaml'}\n")
    return path


def test_file_exists_ok(tmp_path, config, output):
    target = tmp_path / "present.txt"
    target.write_text("x")

    res = runner.invoke(app, ["--config", str(config), "file-exists", str(target)])

    assert res.exit_code == 0
    assert output.lines[0].endswith("[OK]")


def test_file_exists_missing(tmp_path, config, output):
    res = runner.invoke(app, ["--config", str(config), "file-exists", str(tmp_path / "missing")])

    assert res.exit_code == 1
    assert output.lines[0].endswith("[fail]")


def test_required_missing_exits_with_error(tmp_path, config, output):
    missing = tmp_path / "missing"

    res = runner.invoke(app, ["--config", str(config), "dir-exists", "--required", str(missing)])

    assert res.exit_code == 1
    assert f"error: {missing} not found -- exiting" in output.text


def test_ensure_dir(tmp_path, config):
    target = tmp_path / "data"

    res = runner.invoke(app, ["--config", str(config), "ensure-dir", str(target), "--mode", "700"])

    assert res.exit_code == 0
    assert target.is_dir()


def test_quiet_prints_nothing(tmp_path, config, output):
    res = runner.invoke(app, ["--config", str(config), "--quiet", "dir-exists", str(tmp_path)])

    assert res.exit_code == 0
    assert output.text == ""


def test_unknown_target_fails(tmp_path, config, output):
    res = runner.invoke(app, ["--config", str(config), "--target", "webservers", "dir-exists", str(tmp_path)])

    assert res.exit_code == 1
    assert "No hosts found" in output.text


def test_execute_operation_on_local_machine(tmp_path):
    assert execute_operation(files.dir_exists, str(tmp_path), settings=AppSettings())
    assert not execute_operation(files.dir_exists, str(tmp_path / "missing"), settings=AppSettings())
