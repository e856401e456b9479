import re

from nornir.core.task import Task

from syskit.core.models import SubTaskResult
from syskit.core.status import check_or_fail, confirm
from syskit.utils.linux import command_version, output_of
from syskit.utils.logger import logger

_LEADING_DIGITS = re.compile(r"\s*(\d+)")


def _component(text: str) -> int:
    """Numeric value of a version component: its leading digits, else 0."""
    match = _LEADING_DIGITS.match(text)
    return int(match.group(1)) if match else 0


def version(text: str) -> int:
    """
    Regularized number for a dot-syntax version string.

    The first four components are kept; components two to four are
    zero-padded to three digits: "2.30.0" -> 2030000000,
    "1.2.3.4" -> 1002003004. Missing components count as 0.
    """
    parts = (text or "").strip().split(".")
    major, minor, patch, build = (list(map(_component, parts[:4])) + [0, 0, 0, 0])[:4]
    return int(f"{major}{minor:03d}{patch:03d}{build:03d}")


def parse_version_output(output: str) -> str:
    """
    Version string from `--version` output: third space-separated field of
    the first line, first comma removed.
    "Docker version 24.0.5, build ced0996" -> "24.0.5"
    """
    lines = output.strip().splitlines()
    if not lines:
        return ""
    fields = lines[0].split(" ")
    if len(fields) == 1:
        field = fields[0]
    elif len(fields) >= 3:
        field = fields[2]
    else:
        field = ""
    return field.replace(",", "", 1)


def version_string(task: Task, binary: str) -> str:
    """Installed version of `binary` ('' when it can't be run)."""
    res = command_version(task, binary)
    if res.failed:
        return ""
    return parse_version_output(output_of(res))


def check_version(task: Task, binary: str, min_version: str) -> SubTaskResult:
    """
    Compares the installed version of `binary` against `min_version`.
    Exits the process when it is older (or can't be determined).
    """
    installed = version_string(task, binary)
    passed = bool(installed) and version(installed) >= version(min_version)

    msg = f"version check: {binary} (>={min_version}) installed: {installed}"
    check_or_fail(passed, msg, "version check failed")

    return SubTaskResult(success=True, message=msg, data=installed)


def confirm_version(task: Task, binary: str, min_version: str) -> SubTaskResult:
    """Manual user-verified version check."""
    res = command_version(task, binary)
    installed = output_of(res) if not res.failed else "not found"

    logger.header(f"Verify version: {binary}")
    logger.detail(f"{'installed':<30} {installed}")
    logger.detail(f"{'minimum version':<30} {min_version}")

    ok = confirm(f"Is your {binary} version correct?")
    check_or_fail(ok, f"version check: {binary}")

    return SubTaskResult(success=True, message=f"{binary} version confirmed", data=installed)
