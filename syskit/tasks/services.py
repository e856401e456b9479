from nornir.core.task import Task

from syskit.core.decorators import status_check
from syskit.core.models import SubTaskResult
from syskit.utils import linux


@status_check("check service is running: {service}")
def service_running(task: Task, service: str) -> SubTaskResult:
    """Check a system service is running."""
    res = linux.service(task, service, "status", sudo=False)
    if res.failed:
        return SubTaskResult(success=False, message=f"{service} is not running (exit {res.exit_status})")
    return SubTaskResult(success=True, message=f"{service} is running")


@status_check("start {service} service", fatal=True)
def start_service(task: Task, service: str) -> SubTaskResult:
    """Start a system service (requires superuser)."""
    res = linux.service(task, service, "start")
    if res.failed:
        return SubTaskResult(success=False, message=str(res.result).strip())
    return SubTaskResult(success=True, message=f"{service} started")


@status_check("restart service: {service}", fatal=True)
def restart_service(task: Task, service: str) -> SubTaskResult:
    """Restart a system service (requires superuser)."""
    res = linux.service(task, service, "restart")
    if res.failed:
        return SubTaskResult(success=False, message=str(res.result).strip())
    return SubTaskResult(success=True, message=f"{service} restarted")
