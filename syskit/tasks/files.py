from typing import Optional

from nornir.core.task import Task

from syskit.core.decorators import status_check
from syskit.core.models import SubTaskResult
from syskit.core.status import print_status
from syskit.tasks import settings_of
from syskit.utils.linux import path_exists, make_directory, change_mode


# --- CHECKS ---

@status_check("checking file exists: {path}")
def file_exists(task: Task, path: str) -> SubTaskResult:
    """File existence check, print and return."""
    if path_exists(task, path, "f"):
        return SubTaskResult(success=True, message=f"{path} is a file")
    return SubTaskResult(success=False, message=f"{path} not found")


@status_check("checking directory:   {path}")
def dir_exists(task: Task, path: str) -> SubTaskResult:
    """Directory existence check, print and return."""
    if path_exists(task, path, "d"):
        return SubTaskResult(success=True, message=f"{path} is a directory")
    return SubTaskResult(success=False, message=f"{path} not found")


@status_check("checking file exists: {path}", fatal=True, error="{path} not found")
def file_exists_or_fail(task: Task, path: str) -> SubTaskResult:
    return SubTaskResult(success=path_exists(task, path, "f"), message=path)


@status_check("checking directory:   {path}", fatal=True, error="{path} not found")
def dir_exists_or_fail(task: Task, path: str) -> SubTaskResult:
    return SubTaskResult(success=path_exists(task, path, "d"), message=path)


# --- CREATION ---

def exists_or_create_dir(task: Task, path: str, permissions: Optional[str] = None) -> SubTaskResult:
    """
    Reports whether `path` is a directory and creates it when it is not.

    Args:
        task: The Nornir task.
        path: Directory to check/create (parents included).
        permissions: Octal mode for the new directory, defaults to the
            `files.default_permissions` setting (755).

    Returns:
        SubTaskResult with data=True when the directory was created.
    """
    mode = permissions or settings_of(task).files.default_permissions

    exists = dir_exists(task, path)
    if exists.success:
        return SubTaskResult(success=True, message=f"{path} already exists", data=False)

    res = make_directory(task, path)
    if not res.failed:
        res = change_mode(task, path, mode)

    print_status(not res.failed, f"creating directory:   {path}")
    if res.failed:
        return SubTaskResult(success=False, message=f"Failed to create {path}: {res.result}")

    return SubTaskResult(success=True, message=f"Created {path} (mode {mode})", data=True, changed=True)
