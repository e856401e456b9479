import shlex

from nornir.core.task import Task, Result

from syskit.utils.linux import run_command, output_of


def git_config_get(task: Task, key: str) -> str:
    """Reads a global git config value ('' when unset)."""
    res = run_command(task, f"git config --global {shlex.quote(key)}")
    # git exits 1 when the key is unset
    if res.failed:
        return ""
    return output_of(res)


def git_config_set(task: Task, key: str, value: str) -> Result:
    """Sets a global git config value."""
    return run_command(task, f"git config --global {shlex.quote(key)} {shlex.quote(value)}")


def git_clone(task: Task, url: str, base_dir: str = ".") -> Result:
    """Clones `url` into `base_dir`."""
    return run_command(task, f"git -C {shlex.quote(base_dir)} clone {shlex.quote(url)}")


def git_pull(task: Task, repo_dir: str, branch: str, remote: str = "origin") -> Result:
    """Pulls `branch` from `remote` inside an existing checkout."""
    cmd = f"git -C {shlex.quote(repo_dir)} pull {shlex.quote(remote)} {shlex.quote(branch)}"
    return run_command(task, cmd)
