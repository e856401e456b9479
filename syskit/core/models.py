from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

# A check outcome: True/False, or a process exit status (0 = success)
Outcome = Union[bool, int]


class TaskStatus(str, Enum):
    OK = "OK"  # Check passed or the host was already in the wanted state
    CHANGED = "CHANGED"  # Operation modified the host successfully
    FAILED = "FAILED"  # Check or command failed


@dataclass
class StandardResult:
    """
    Standard payload to be included in Nornir's Result.result.
    """
    status: TaskStatus
    message: str
    data: Optional[Any] = None


@dataclass
class SubTaskResult:
    """Outcome of a single wrapped OS command."""
    success: bool
    message: str
    exception: Optional[Exception] = None
    changed: bool = False  # The host was modified (directory created, group added, ...)
    data: Optional[Any] = None  # Extracted values (installed version, git user, ...)


def is_success(state: Outcome) -> bool:
    """Interprets a bool or an exit status as success/failure."""
    if isinstance(state, bool):
        return state
    return state == 0
