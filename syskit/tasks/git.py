import posixpath
from typing import Optional

from nornir.core.task import Task
from rich.prompt import Prompt

from syskit.core.models import SubTaskResult
from syskit.core.status import print_status, check_or_fail
from syskit.tasks import settings_of
from syskit.utils import git
from syskit.utils.linux import path_exists
from syskit.utils.logger import logger


# --- IDENTITY ---

def git_user(task: Task) -> str:
    return git.git_config_get(task, "user.name")


def git_email(task: Task) -> str:
    return git.git_config_get(task, "user.email")


def check_github_user(task: Task) -> SubTaskResult:
    """
    Set global git username and email if not already set.
    Prompts for both values when either is missing.
    """
    msg = "check Github user"
    user, email = git_user(task), git_email(task)

    configured = bool(user and email)
    print_status(configured, msg)
    if configured:
        return SubTaskResult(success=True, message=f"{user} <{email}>", data=user)

    host = settings_of(task).git.host
    logger.header(f"Set your username and email for {host} (this will change global git config)")
    user = Prompt.ask(f"Set username for {host}", console=logger.console)
    email = Prompt.ask(f"Set email for {host}", console=logger.console)
    logger.detail(f"Setting git global user.name: {user}")
    logger.detail(f"Setting git global user.email: {email}")

    ok = bool(user and email)
    if ok:
        ok = not git.git_config_set(task, "user.name", user).failed
    if ok:
        ok = not git.git_config_set(task, "user.email", email).failed
    check_or_fail(ok, msg, "setup git username failed")

    return SubTaskResult(success=True, message=f"{user} <{email}>", data=user)


# --- REPOSITORIES ---

def strip_repo_name(repo: str) -> str:
    """
    Directory name git creates for `repo`:
    "owner/name", "git@host:owner/name.git" and "https://host/owner/name" -> "name".
    """
    path = repo.rstrip("/")
    if "://" not in path and ":" in path:
        # scp-like syntax: git@github.com:owner/name.git
        path = path.split(":", 1)[1]
    name = path.rsplit("/", 1)[-1]
    if name.endswith(".git"):
        name = name[:-len(".git")]
    return name


def repo_url(task: Task, repo: str) -> str:
    """Clone URL: URLs pass through, "owner/name" and bare names map to the configured host."""
    if "://" in repo or "@" in repo:
        return repo

    git_settings = settings_of(task).git
    if "/" not in repo:
        account = git_settings.account or git_user(task)
        repo = f"{account}/{repo}"
    return f"git@{git_settings.host}:{repo}"


def repo_local_dir_exists(task: Task, repo: str, base_dir: str = ".") -> SubTaskResult:
    """Does the repository exist in our local directory context?"""
    repo_dir = posixpath.join(base_dir, strip_repo_name(repo))
    exists = path_exists(task, repo_dir, "d")
    print_status(exists, f'check repo "{repo}" exists')
    return SubTaskResult(success=exists, message=repo_dir, data=repo_dir)


def clone_repo(task: Task, repo: str, base_dir: str = ".") -> SubTaskResult:
    """Clone a repository into `base_dir`. Exits the process on failure."""
    msg = f'clone "{repo}"'
    logger.header(msg)

    url = repo_url(task, repo)
    res = git.git_clone(task, url, base_dir)
    if res.failed:
        logger.detail(str(res.result).strip())
    check_or_fail(not res.failed, msg)

    return SubTaskResult(success=True, message=f"Cloned {url}", data=url)


def update_repo(task: Task, repo: str, base_dir: str = ".", branch: Optional[str] = None) -> SubTaskResult:
    """Pull the latest version of an existing checkout. Exits the process on failure."""
    repo_name = strip_repo_name(repo)
    msg = f"Update repository: {repo_name}"
    logger.header(msg)

    repo_dir = posixpath.join(base_dir, repo_name)
    branch = branch or settings_of(task).git.branch

    ok = path_exists(task, repo_dir, "d")
    if ok:
        res = git.git_pull(task, repo_dir, branch)
        if res.failed:
            logger.detail(str(res.result).strip())
        ok = not res.failed
    check_or_fail(ok, msg)

    return SubTaskResult(success=True, message=f"{repo_name} updated from origin/{branch}", data=repo_dir)


def clone_or_update_repo(task: Task, repo: str, base_dir: str = ".") -> SubTaskResult:
    """Clone a repository if it doesn't exist, otherwise pull latest version."""
    if repo_local_dir_exists(task, repo, base_dir).success:
        result = update_repo(task, repo, base_dir)
    else:
        result = clone_repo(task, repo, base_dir)

    check_or_fail(result.success, f"repo {repo} exists and up to date")
    return result
