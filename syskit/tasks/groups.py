from typing import Optional

from nornir.core.task import Task

from syskit.core.decorators import status_check
from syskit.core.models import SubTaskResult
from syskit.core.status import print_status, check_or_fail
from syskit.utils import linux
from syskit.utils.logger import logger


@status_check("group exists? {group}")
def group_exists(task: Task, group: str) -> SubTaskResult:
    """Checks the group database for an exact group name."""
    res = linux.getent_group(task, group)
    if res.failed:
        return SubTaskResult(success=False, message=f"Group '{group}' not found")
    return SubTaskResult(success=True, message=linux.output_of(res))


def create_group(task: Task, group: str) -> SubTaskResult:
    """Create group if it doesn't exist."""
    if group_exists(task, group).success:
        return SubTaskResult(success=True, message=f"Group '{group}' already exists", data=False)

    res = linux.groupadd(task, group)
    print_status(not res.failed, f"create group: {group}")
    if res.failed:
        return SubTaskResult(success=False, message=f"groupadd failed: {res.result}")

    return SubTaskResult(success=True, message=f"Group '{group}' created", data=True, changed=True)


@status_check("user is member of group? {group}")
def user_has_group(task: Task, group: str, user: Optional[str] = None) -> SubTaskResult:
    """Checks if `user` (default: the current login user) is member of `group`."""
    user = user or linux.current_user(task)
    if group in linux.user_group_names(task, user):
        return SubTaskResult(success=True, message=f"{user} is in {group}", data=user)
    return SubTaskResult(success=False, message=f"{user} is not in {group}", data=user)


def add_user_to_group(task: Task, group: str, user: Optional[str] = None) -> SubTaskResult:
    """
    Adds `user` (default: the current login user) to `group`, then re-checks
    membership. A failed usermod exits the process.

    Running sessions keep their old group list: the membership applies to
    new logins only.
    """
    user = user or linux.current_user(task)

    res = linux.usermod_append_group(task, user, group)
    check_or_fail(not res.failed, f"add user to group: {group}")

    logger.header("refresh user groups")
    logger.detail(f"log in again (or run 'newgrp {group}') to use the new group in this session")

    return user_has_group(task, group, user)
