"""
Status-reporting primitive.

Every check in syskit ends here: the outcome is printed as a padded
"[+] <message> [OK|fail]" line and handed back unchanged, or, for the
mandatory variants, a failure terminates the process.
"""
import sys
from typing import Optional

from rich.prompt import Confirm

from syskit.core.models import Outcome, is_success
from syskit.core.state import config as global_config
from syskit.utils.logger import logger, sys_logger


def print_padded(message: str) -> None:
    """Print a padded message with no status."""
    logger.padded(message)


def print_status(state: Outcome, message: str) -> Outcome:
    """
    Print the status line for `state` and return `state` untouched.

    Args:
        state: True/False, or an exit status where 0 means success.
        message: Description shown in the padded column.
    """
    success = is_success(state)
    sys_logger.info(f"[STATUS] '{message}' -> {'OK' if success else 'FAIL'}")
    logger.status(message, success)
    return state


def fail(message: str):
    """Print a formatted failure message and exit with status 1."""
    sys_logger.error(f"[FATAL] {message}")
    logger.error(f"\nerror: {message} -- exiting")
    sys.exit(1)


def check_or_fail(state: Outcome, message: str, error: Optional[str] = None) -> Outcome:
    """
    Pass check or exit.

    Args:
        state: Outcome of the check.
        message: Description shown in the status line.
        error: Fail message; defaults to "<message> failed".
    """
    print_status(state, message)
    if not is_success(state):
        fail(error or f"{message} failed")
    return state


def confirm(question: str) -> bool:
    """Yes/no prompt. Anything but an explicit yes counts as failure."""
    if global_config.ASSUME_YES:
        sys_logger.info(f"[CONFIRM] '{question}' -> yes (assumed)")
        return True

    answer = Confirm.ask(f"\n{question} (Y/n)?", console=logger.console, default=False,
                          show_default=False, show_choices=False)
    sys_logger.info(f"[CONFIRM] '{question}' -> {'yes' if answer else 'no'}")
    return answer


def confirm_or_fail(question: str, error: str) -> bool:
    """Confirm a user input or fail."""
    if not confirm(question):
        fail(error)
    return True
