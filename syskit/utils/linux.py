import os
import shlex
import subprocess
from typing import List, Optional, Union

from nornir.core.task import Task, Result
from nornir_scrapli.tasks import send_command

from syskit.core.state import config as global_config
from syskit.utils.logger import sys_logger

LOCAL_PLATFORM = "linux_local"

# Appended to remote commands: scrapli returns the output but not the exit code
EXIT_MARKER = "__SYSKIT_EXIT__="


# --- CORE EXECUTION ---

def run_command(task: Task, cmd: str, sudo: bool = False) -> Result:
    """
    Unified command dispatcher.
    Handles:
    1. Platform dispatch (Local vs Remote SSH)
    2. Sudo privilege escalation (Passwordless vs Password)

    Returns:
        Result: A single Nornir Result object, with `exit_status` set.
    """
    local = task.host.platform == LOCAL_PLATFORM
    sys_logger.debug(f"[{task.host.name}] RUN {cmd} (sudo={sudo})")

    # --- SUDO WRAPPING LOGIC ---
    password = None
    if sudo and not (local and os.geteuid() == 0):
        if global_config.SUDO_PASSWORD:
            password = global_config.SUDO_PASSWORD
            # -S reads the password from stdin, -p '' hides the prompt
            cmd = f"sudo -S -p '' {cmd}"
        else:
            cmd = f"sudo -n {cmd}"

    # --- EXECUTION ---
    if local:
        result = _run_local_subprocess(task, cmd, stdin=password + "\n" if password else None)
    else:
        if password:
            # printf is a builtin of the remote shell: the password never shows up in a process argv
            cmd = f"printf '%s\\n' {shlex.quote(password)} | {cmd}"
        result = _run_remote_command(task, cmd)

    # --- Advanced Error Handling ---
    if result.failed and "a password is required" in str(result.result):
        user = task.host.username
        host = task.host.hostname
        return Result(
            host=task.host,
            failed=True,
            exit_status=result.exit_status,
            result=f"Sudo privileges missing for user '{user}' on '{host}' (NOPASSWD or --sudo-password required)."
        )

    return result


def _run_local_subprocess(task: Task, command: str, stdin: Optional[str] = None) -> Result:
    """Internal helper for local execution. `stdin` is written to the process input (sudo -S password)."""
    # Shell operators need a shell; anything else is split and executed directly
    use_shell = any(op in command for op in ("|", "&&", "||", ">", ";"))

    try:
        if use_shell:
            proc = subprocess.run(
                command,
                shell=True,
                input=stdin,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                universal_newlines=True
            )
        else:
            proc = subprocess.run(
                shlex.split(command),
                input=stdin,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                universal_newlines=True
            )

        output = proc.stdout
        if proc.returncode != 0:
            output += f"\nError: {proc.stderr}"

        return Result(
            host=task.host,
            result=output,
            failed=proc.returncode != 0,
            exit_status=proc.returncode,
            stdout=proc.stdout,
            stderr=proc.stderr,
        )
    except (OSError, ValueError) as e:
        # Missing binary, permission denied, unbalanced quotes
        return Result(
            host=task.host,
            failed=True,
            exit_status=127,
            result=f"Local execution exception: {str(e)}"
        )


def _run_remote_command(task: Task, command: str) -> Result:
    """Runs a command over SSH and recovers its exit status from a trailing marker."""
    multi_result = task.run(task=send_command, command=f"{command}; echo {EXIT_MARKER}$?")
    result = multi_result[0]

    output = str(result.result or "")
    lines = output.rstrip().splitlines()
    exit_status = 1 if result.failed else 0
    if lines and lines[-1].startswith(EXIT_MARKER):
        try:
            exit_status = int(lines[-1][len(EXIT_MARKER):])
        except ValueError:
            pass
        output = "\n".join(lines[:-1])
        if lines[:-1]:
            output += "\n"

    return Result(
        host=task.host,
        result=output,
        failed=exit_status != 0,
        exit_status=exit_status,
        stdout=output,
        stderr="",
    )


def output_of(result: Result) -> str:
    """Stripped stdout of a command Result."""
    return str(getattr(result, "stdout", None) or result.result or "").strip()


# --- FILE OPERATIONS ---

def path_exists(task: Task, path: str, kind: str = "f") -> bool:
    """`test -<kind> <path>`: 'f' regular file, 'd' directory, 'e' anything."""
    return not run_command(task, f"test -{kind} {shlex.quote(path)}").failed


def read_file(task: Task, path: str) -> str:
    """Reads a remote or local file and returns the content."""
    res = run_command(task, f"cat {shlex.quote(path)}")
    if res.failed:
        return ""
    return res.stdout


def make_directory(task: Task, path: str, sudo: bool = False) -> Result:
    """Creates a directory (mkdir -p)."""
    return run_command(task, f"mkdir -p {shlex.quote(path)}", sudo=sudo)


def change_mode(task: Task, path: str, mode: str, sudo: bool = False, recursive: bool = False) -> Result:
    """Changes file permissions."""
    flags = "-R " if recursive else ""
    return run_command(task, f"chmod {flags}{mode} {shlex.quote(path)}", sudo=sudo)


# --- PACKAGE MANAGEMENT (APT) ---

def apt_update(task: Task) -> Result:
    """Refreshes the apt package index."""
    return run_command(task, "apt-get update", sudo=True)


def apt_install(task: Task, packages: Union[str, List[str]], update: bool = False) -> Result:
    """Installs packages via apt-get."""
    if isinstance(packages, list):
        pkg_str = " ".join(shlex.quote(p) for p in packages)
    else:
        pkg_str = shlex.quote(packages)

    if update:
        res_up = apt_update(task)
        if res_up.failed:
            return Result(host=task.host, failed=True, exit_status=res_up.exit_status,
                          result=f"Apt update failed: {res_up.result}")

    cmd = f"env DEBIAN_FRONTEND=noninteractive apt-get install -y {pkg_str}"
    return run_command(task, cmd, sudo=True)


# --- USERS & GROUPS ---

def current_user(task: Task) -> str:
    """Login name of the user commands run as."""
    res = run_command(task, "id -un")
    if res.failed:
        return task.host.username or ""
    return output_of(res)


def getent_group(task: Task, group: str) -> Result:
    return run_command(task, f"getent group {shlex.quote(group)}")


def user_group_names(task: Task, user: str) -> List[str]:
    """Group names of `user` as recorded in the group database."""
    res = run_command(task, f"id -nG {shlex.quote(user)}")
    if res.failed:
        return []
    return output_of(res).split()


def groupadd(task: Task, group: str) -> Result:
    return run_command(task, f"groupadd {shlex.quote(group)}", sudo=True)


def usermod_append_group(task: Task, user: str, group: str) -> Result:
    return run_command(task, f"usermod -aG {shlex.quote(group)} {shlex.quote(user)}", sudo=True)


# --- SYSTEM SERVICES ---

def service(task: Task, name: str, action: str, sudo: bool = True) -> Result:
    """
    Manages SysV/systemd services through the `service` wrapper.
    Actions: start, stop, restart, reload, status
    """
    return run_command(task, f"service {shlex.quote(name)} {action}", sudo=sudo)


def reboot(task: Task) -> Result:
    return run_command(task, "shutdown -r now", sudo=True)


# --- TOOLS / COMMANDS ---

def command_exists(task: Task, command: str) -> bool:
    """Checks if a command exists in PATH (shell builtin `command -v`)."""
    return not run_command(task, f"command -v {shlex.quote(command)} >/dev/null").failed


def command_version(task: Task, command: str) -> Result:
    """Runs `<command> --version`."""
    return run_command(task, f"{shlex.quote(command)} --version")
