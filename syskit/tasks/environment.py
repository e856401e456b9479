import os
import posixpath
import shlex
from io import StringIO

from dotenv import dotenv_values
from nornir.core.task import Task

from syskit.core.decorators import status_check
from syskit.core.models import SubTaskResult
from syskit.tasks.files import dir_exists_or_fail
from syskit.utils.linux import path_exists, read_file, run_command, output_of
from syskit.utils.logger import logger


@status_check("sourcing env file: {path}")
def source_env_file(task: Task, path: str) -> SubTaskResult:
    """
    Source an env file: every KEY=VALUE pair is exported to the
    environment of the current process, overriding existing values.
    """
    if not path_exists(task, path, "f"):
        return SubTaskResult(success=False, message=f"{path} not found")

    values = dotenv_values(stream=StringIO(read_file(task, path)))
    exported = {key: value for key, value in values.items() if value is not None}
    os.environ.update(exported)

    return SubTaskResult(success=True, message=f"{len(exported)} variables exported", data=exported)


def source_all_envs(task: Task, directory: str) -> SubTaskResult:
    """Source all the .env files in the passed directory."""
    dir_exists_or_fail(task, directory)
    logger.header(f"sourcing env files in {directory}:")

    pattern = posixpath.join(shlex.quote(directory), "*.env")
    res = run_command(task, f"ls -1d {pattern} 2>/dev/null || true")
    env_files = sorted(line for line in output_of(res).splitlines() if line)

    exported = {}
    for env_file in env_files:
        result = source_env_file(task, env_file)
        if not result.success:
            return SubTaskResult(success=False, message=result.message, data=exported)
        exported.update(result.data)

    return SubTaskResult(success=True, message=f"{len(env_files)} env files sourced", data=exported)
