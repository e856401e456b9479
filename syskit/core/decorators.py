import inspect
from functools import wraps
from typing import Optional

from nornir.core.task import Task, Result

from syskit.core.models import TaskStatus, StandardResult, SubTaskResult
from syskit.core.state import config as global_config
from syskit.core.status import print_status, fail
from syskit.utils.logger import logger, sys_logger


def automated_step(step_name: str):
    """
    Decorator for top-level Nornir tasks.
    1. Logs start and end to file.
    2. Catches unexpected exceptions and turns them into a FAILED result.
    3. Ensures the return value carries a StandardResult.
    """

    def decorator(func):
        @wraps(func)
        def wrapper(task: Task, *args, **kwargs) -> Result:
            host_name = task.host.name
            sys_logger.info(f"START task='{step_name}' host='{host_name}'")

            try:
                result = func(task, *args, **kwargs)

                status = "UNKNOWN"
                if isinstance(result.result, StandardResult):
                    status = result.result.status.value

                sys_logger.info(f"END task='{step_name}' host='{host_name}' status='{status}'")
                return result

            except Exception as e:
                error_msg = f"CRITICAL EXCEPTION in '{step_name}': {str(e)}"
                sys_logger.error(error_msg, exc_info=True)

                return Result(
                    host=task.host,
                    failed=True,
                    result=StandardResult(
                        status=TaskStatus.FAILED,
                        message=f"System Error: {str(e)}"
                    )
                )

        return wrapper

    return decorator


def status_check(message: str, fatal: bool = False, error: Optional[str] = None):
    """
    Decorator for single-command checks returning a SubTaskResult.

    `message` and `error` are format templates filled from the call
    arguments, e.g. "checking file exists: {path}". The outcome is printed
    as a status line; with `fatal=True` a failure exits the process.
    """

    def decorator(func):
        signature = inspect.signature(func)

        @wraps(func)
        def wrapper(task: Task, *args, **kwargs) -> SubTaskResult:
            bound = signature.bind(task, *args, **kwargs)
            bound.apply_defaults()
            step_name = message.format(**bound.arguments)
            host_name = task.host.name

            sys_logger.info(f"[{host_name}] [SUB-START] '{step_name}'")

            try:
                result = func(task, *args, **kwargs)
            except Exception as e:
                error_msg = f"Exception in '{step_name}': {str(e)}"
                sys_logger.error(f"[{host_name}] [SUB-CRASH] {error_msg}", exc_info=True)
                result = SubTaskResult(success=False, message=error_msg, exception=e)

            status_log = "OK" if result.success else "FAIL"
            log_msg = f"[{host_name}] [SUB-END] '{step_name}' -> {status_log} ({result.message})"
            if result.success:
                sys_logger.info(log_msg)
            else:
                sys_logger.warning(log_msg)

            print_status(result.success, step_name)
            if result.exception is not None and global_config.VERBOSE:
                logger.detail(result.message)

            if fatal and not result.success:
                fail(error.format(**bound.arguments) if error else f"{step_name} failed")

            return result

        return wrapper

    return decorator
