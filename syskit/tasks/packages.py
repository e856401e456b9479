from typing import List, Union

from nornir.core.task import Task

from syskit.core.models import SubTaskResult
from syskit.core.status import check_or_fail
from syskit.utils import linux
from syskit.utils.logger import logger


def apt_update(task: Task) -> SubTaskResult:
    """Runs apt-get update (requires superuser)."""
    res = linux.apt_update(task)
    if res.failed:
        return SubTaskResult(success=False, message=f"Apt update failed: {res.result}")
    return SubTaskResult(success=True, message="Package index updated")


def package_install(task: Task, package: str) -> SubTaskResult:
    """
    Installs one apt package (requires superuser).
    A failed install exits the process.
    """
    logger.header(f"install {package}")

    res = linux.apt_install(task, package)
    if res.failed:
        logger.detail(str(res.result).strip())
    check_or_fail(not res.failed, f"install {package}")

    return SubTaskResult(success=True, message=f"{package} installed")


def package_install_all(task: Task, packages: Union[str, List[str]]) -> SubTaskResult:
    """Updates the package index and installs every package in one apt-get call."""
    if isinstance(packages, str):
        packages = packages.split()

    logger.header(f"install packages: {' '.join(packages)}")

    res = linux.apt_install(task, packages, update=True)
    if res.failed:
        logger.detail(str(res.result).strip())
    check_or_fail(not res.failed, "install packages")

    return SubTaskResult(success=True, message=f"{len(packages)} packages installed", data=packages)
