from nornir.core.task import Task

from syskit.core.decorators import status_check
from syskit.core.models import SubTaskResult
from syskit.utils.linux import command_exists


@status_check("checking installed: {binary}")
def is_installed(task: Task, binary: str) -> SubTaskResult:
    if command_exists(task, binary):
        return SubTaskResult(success=True, message=f"{binary} found in PATH")
    return SubTaskResult(success=False, message=f"{binary} not found in PATH")


@status_check("checking installed: {binary}", fatal=True, error="{binary} not installed")
def installed_or_fail(task: Task, binary: str) -> SubTaskResult:
    return SubTaskResult(success=command_exists(task, binary), message=binary)
