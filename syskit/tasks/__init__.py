from nornir.core.task import Task, Result

from syskit.core.models import TaskStatus, StandardResult, SubTaskResult
from syskit.core.settings import AppSettings, load_settings
from syskit.core.state import config as global_config


def as_result(task: Task, sub_res: SubTaskResult) -> Result:
    """
    Helper to wrap a SubTaskResult into a Nornir Result.
    """
    if sub_res.success:
        status = TaskStatus.CHANGED if sub_res.changed else TaskStatus.OK
        return Result(
            host=task.host,
            changed=sub_res.changed,
            result=StandardResult(status, sub_res.message, sub_res.data)
        )
    return Result(
        host=task.host,
        failed=True,
        result=StandardResult(TaskStatus.FAILED, sub_res.message, sub_res.data)
    )


def settings_of(task: Task) -> AppSettings:
    """Settings injected in the host data by the runner, or loaded from disk."""
    settings = task.host.get("app_config")
    if isinstance(settings, AppSettings):
        return settings
    return load_settings(global_config.CONFIG_FILE)


__all__ = [
    "as_result",
    "settings_of",
]
