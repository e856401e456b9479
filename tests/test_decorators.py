import pytest
from nornir.core.task import Result

from syskit.core.decorators import automated_step, status_check
from syskit.core.models import StandardResult, SubTaskResult, TaskStatus


@status_check("probing {name} with {flag}")
def probe(task, name, flag="default", outcome=True):
    return SubTaskResult(success=outcome, message=f"{name} probed")


@status_check("exploding {name}")
def explode(task, name):
    raise RuntimeError("kaboom")


@status_check("required {name}", fatal=True, error="{name} is mandatory")
def required(task, name, outcome):
    return SubTaskResult(success=outcome, message=name)


class TestStatusCheck:
    def test_message_uses_arguments_and_defaults(self, task, output):
        probe(task, "disk")

        assert output.lines == [f"[+] {'probing disk with default':<64} [OK]"]

    def test_keyword_arguments(self, task, output):
        result = probe(task, name="cpu", flag="fast", outcome=False)

        assert not result.success
        assert output.lines[0].startswith("[+] probing cpu with fast")
        assert output.lines[0].endswith("[fail]")

    def test_exception_becomes_failure(self, task, output):
        result = explode(task, "bomb")

        assert not result.success
        assert isinstance(result.exception, RuntimeError)
        assert output.lines[0].endswith("[fail]")
        assert "kaboom" in output.text

    def test_fatal_success_returns(self, task):
        assert required(task, "git", True).success

    def test_fatal_failure_exits_with_error_template(self, task, output):
        with pytest.raises(SystemExit):
            required(task, "git", False)

        assert "error: git is mandatory -- exiting" in output.text


class TestAutomatedStep:
    def test_passes_result_through(self, task):
        @automated_step("Fine Step")
        def fine(task):
            return Result(host=task.host, result=StandardResult(TaskStatus.OK, "done"))

        assert fine(task).result.message == "done"

    def test_exception_becomes_failed_result(self, task):
        @automated_step("Broken Step")
        def broken(task):
            raise ValueError("bad input")

        res = broken(task)

        assert res.failed
        assert res.result.status == TaskStatus.FAILED
        assert "bad input" in res.result.message
