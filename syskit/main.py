from pathlib import Path
from typing import List, Optional

import typer

from syskit.core.runner import execute_operation
from syskit.core.settings import load_settings
from syskit.core.state import config as global_config
from syskit.tasks import files, git, groups, installation, packages, services, system, versions
from syskit.utils.logger import logger, setup_file_logging

app = typer.Typer(
    help="syskit - system administration checks for Debian-based hosts",
    add_completion=True,
    no_args_is_help=True
)


@app.callback()
def main(
        ctx: typer.Context,
        quiet: bool = typer.Option(
            False, "--quiet", "-q",
            help="Only print fatal errors."
        ),
        assume_yes: bool = typer.Option(
            False, "--yes", "-y",
            help="Answer yes to every confirmation prompt."
        ),
        config_file: Path = typer.Option(
            "syskit.yaml", "--config", "-c",
            help="Path to the configuration YAML file.",
            dir_okay=False
        ),
        target: Optional[str] = typer.Option(
            None, "--target", "-t",
            help="Inventory host or group ('all' for every host). Default: local machine."
        ),
        sudo_password: Optional[str] = typer.Option(
            None, "--sudo-password",
            envvar="SYSKIT_SUDO_PASSWORD",
            help="Password for sudo when NOPASSWD is not configured."
        )
):
    """
    syskit CLI.
    Common entry point for all commands.
    """
    global_config.VERBOSE = not quiet
    global_config.ASSUME_YES = assume_yes
    global_config.CONFIG_FILE = str(config_file)
    global_config.SUDO_PASSWORD = sudo_password
    logger.enabled = not quiet

    settings = load_settings(str(config_file))
    setup_file_logging(settings.log_file)

    ctx.obj = {"target": target, "settings": settings}


def run(ctx: typer.Context, operation, *args, **kwargs):
    """Runs an operation on the selected hosts and exits with its status."""
    ok = execute_operation(operation, *args, target=ctx.obj["target"], settings=ctx.obj["settings"], **kwargs)
    raise typer.Exit(code=0 if ok else 1)


# --- FILES ---

@app.command(name="file-exists")
def file_exists(ctx: typer.Context, path: str = typer.Argument(..., help="File path."),
                required: bool = typer.Option(False, "--required", help="Exit immediately when missing.")):
    """Check that a regular file exists."""
    run(ctx, files.file_exists_or_fail if required else files.file_exists, path)


@app.command(name="dir-exists")
def dir_exists(ctx: typer.Context, path: str = typer.Argument(..., help="Directory path."),
               required: bool = typer.Option(False, "--required", help="Exit immediately when missing.")):
    """Check that a directory exists."""
    run(ctx, files.dir_exists_or_fail if required else files.dir_exists, path)


@app.command(name="ensure-dir")
def ensure_dir(ctx: typer.Context, path: str,
               mode: Optional[str] = typer.Option(None, "--mode", "-m", help="Octal permissions (default 755).")):
    """[Idempotent] Create a directory unless it exists."""
    run(ctx, files.exists_or_create_dir, path, mode)


# --- PACKAGES ---

@app.command()
def install(ctx: typer.Context, package_names: List[str] = typer.Argument(..., metavar="PACKAGE...")):
    """Install apt packages (requires superuser)."""
    if len(package_names) == 1:
        run(ctx, packages.package_install, package_names[0])
    else:
        run(ctx, packages.package_install_all, package_names)


# --- SERVICES ---

@app.command(name="service-running")
def service_running(ctx: typer.Context, service: str):
    """Check a system service is running."""
    run(ctx, services.service_running, service)


@app.command(name="start-service")
def start_service(ctx: typer.Context, service: str):
    """Start a system service (requires superuser)."""
    run(ctx, services.start_service, service)


@app.command(name="restart-service")
def restart_service(ctx: typer.Context, service: str):
    """Restart a system service (requires superuser)."""
    run(ctx, services.restart_service, service)


# --- GROUPS ---

@app.command(name="group-exists")
def group_exists(ctx: typer.Context, group: str):
    """Check a unix group exists."""
    run(ctx, groups.group_exists, group)


@app.command(name="create-group")
def create_group(ctx: typer.Context, group: str):
    """[Idempotent] Create a unix group unless it exists."""
    run(ctx, groups.create_group, group)


@app.command(name="user-has-group")
def user_has_group(ctx: typer.Context, group: str,
                   user: Optional[str] = typer.Option(None, "--user", "-u", help="Default: current user.")):
    """Check group membership."""
    run(ctx, groups.user_has_group, group, user)


@app.command(name="add-user-to-group")
def add_user_to_group(ctx: typer.Context, group: str,
                      user: Optional[str] = typer.Option(None, "--user", "-u", help="Default: current user.")):
    """Add a user to a group (requires superuser)."""
    run(ctx, groups.add_user_to_group, group, user)


# --- INSTALLATION & VERSIONS ---

@app.command(name="is-installed")
def is_installed(ctx: typer.Context, binary: str,
                 required: bool = typer.Option(False, "--required", help="Exit immediately when missing.")):
    """Check a binary is available in PATH."""
    run(ctx, installation.installed_or_fail if required else installation.is_installed, binary)


@app.command(name="check-version")
def check_version(ctx: typer.Context, binary: str, min_version: str):
    """Compare '<binary> --version' against a minimum version."""
    run(ctx, versions.check_version, binary, min_version)


@app.command(name="confirm-version")
def confirm_version(ctx: typer.Context, binary: str, min_version: str):
    """Show '<binary> --version' and ask whether it is acceptable."""
    run(ctx, versions.confirm_version, binary, min_version)


# --- GIT ---

@app.command(name="check-git-user")
def check_git_user(ctx: typer.Context):
    """Ensure the global git user.name and user.email are set."""
    run(ctx, git.check_github_user)


@app.command(name="clone-or-update")
def clone_or_update(ctx: typer.Context, repo: str,
                    directory: str = typer.Option(".", "--dir", "-d", help="Parent directory of the checkout.")):
    """Clone a repository, or pull it when the checkout exists."""
    run(ctx, git.clone_or_update_repo, repo, directory)


# --- SYSTEM ---

@app.command(name="restart-os")
def restart_os(ctx: typer.Context):
    """Reboot after confirmation (requires superuser)."""
    run(ctx, system.restart_os)


if __name__ == "__main__":
    app()
