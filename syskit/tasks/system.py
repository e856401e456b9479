from nornir.core.task import Task

from syskit.core.models import SubTaskResult
from syskit.core.status import confirm, print_status
from syskit.utils.linux import reboot
from syskit.utils.logger import logger


def restart_os(task: Task) -> SubTaskResult:
    """Prompt to reboot the machine (requires superuser)."""
    if not confirm("System restart required to continue. Restart now?"):
        logger.header("canceled")
        return SubTaskResult(success=False, message="Restart canceled")

    res = reboot(task)
    print_status(not res.failed, f"restart {task.host.name}")
    if res.failed:
        return SubTaskResult(success=False, message=f"Restart failed: {res.result}")

    return SubTaskResult(success=True, message="Restart scheduled")
