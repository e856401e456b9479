from syskit.core.state import config as global_config
from syskit.tasks import system


def test_restart_canceled(task, shell, answer, output):
    answer(False)

    result = system.restart_os(task)

    assert not result.success
    assert shell.commands == []
    assert "canceled" in output.text


def test_restart_confirmed(task, shell, answer):
    answer(True)

    result = system.restart_os(task)

    assert result.success
    assert shell.calls == [("shutdown -r now", True)]


def test_restart_with_assume_yes(task, shell, monkeypatch, output):
    monkeypatch.setattr(global_config, "ASSUME_YES", True)

    assert system.restart_os(task).success
    assert output.lines[-1].startswith("[+] restart localhost")
