"""
Shared fixtures.

- `task`: a localhost task stand-in (real nornir Host, local platform).
- `output`: everything printed on the status console.
- `shell`: replaces the command dispatcher with a recorder for commands
  that need root, network or specific host state.
"""
import io
from types import SimpleNamespace
from typing import List, Tuple

import pytest
from nornir.core.inventory import Host
from nornir.core.task import Result
from rich.console import Console

from syskit.core.settings import AppSettings, GitSettings
from syskit.core.state import config as global_config
from syskit.utils.linux import LOCAL_PLATFORM
from syskit.utils.logger import logger


class Output:
    def __init__(self, buffer: io.StringIO):
        self.buffer = buffer

    @property
    def text(self) -> str:
        return self.buffer.getvalue()

    @property
    def lines(self) -> List[str]:
        return [line.rstrip() for line in self.text.splitlines() if line.strip()]


class FakeShell:
    """Records commands and answers them from registered prefixes (latest registration wins)."""

    def __init__(self):
        self.calls: List[Tuple[str, bool]] = []
        self._responses: List[Tuple[str, int, str]] = []

    def on(self, prefix: str, exit_status: int = 0, stdout: str = ""):
        self._responses.insert(0, (prefix, exit_status, stdout))

    @property
    def commands(self) -> List[str]:
        return [cmd for cmd, _ in self.calls]

    def __call__(self, task, cmd: str, sudo: bool = False) -> Result:
        self.calls.append((cmd, sudo))
        exit_status, stdout = 0, ""
        for prefix, status, out in self._responses:
            if cmd.startswith(prefix):
                exit_status, stdout = status, out
                break

        result = stdout if exit_status == 0 else f"{stdout}\nError: exit {exit_status}"
        return Result(
            host=task.host,
            result=result,
            failed=exit_status != 0,
            exit_status=exit_status,
            stdout=stdout,
            stderr="",
        )


@pytest.fixture(autouse=True)
def output(monkeypatch) -> Output:
    buffer = io.StringIO()
    console = Console(file=buffer, width=200, color_system=None, theme=logger.custom_theme, highlight=False)
    monkeypatch.setattr(logger, "console", console)
    monkeypatch.setattr(logger, "enabled", True)
    monkeypatch.setattr(global_config, "VERBOSE", True)
    monkeypatch.setattr(global_config, "ASSUME_YES", False)
    monkeypatch.setattr(global_config, "SUDO_PASSWORD", None)
    monkeypatch.setattr(global_config, "CONFIG_FILE", "syskit.yaml")
    return Output(buffer)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(git=GitSettings(account="alice"))


@pytest.fixture
def task(settings):
    host = Host(name="localhost", hostname="localhost", platform=LOCAL_PLATFORM, data={"app_config": settings})
    return SimpleNamespace(host=host)


@pytest.fixture
def shell(monkeypatch) -> FakeShell:
    fake = FakeShell()
    monkeypatch.setattr("syskit.utils.linux.run_command", fake)
    monkeypatch.setattr("syskit.utils.git.run_command", fake)
    monkeypatch.setattr("syskit.tasks.environment.run_command", fake)
    return fake


@pytest.fixture
def answer(monkeypatch):
    """Scripts the answers of rich prompts: answer(True) or answer("bob", "bob@example.com")."""

    def _answer(*answers):
        replies = iter(answers)
        monkeypatch.setattr("rich.prompt.Confirm.ask", lambda *args, **kwargs: next(replies))
        monkeypatch.setattr("rich.prompt.Prompt.ask", lambda *args, **kwargs: next(replies))

    return _answer
