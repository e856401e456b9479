from typing import Any, Callable, Optional

from nornir.core import Nornir
from nornir.core.task import AggregatedResult, Task, Result
from nornir.plugins.runners import SerialRunner
from rich.panel import Panel

from syskit.core.decorators import automated_step
from syskit.core.models import SubTaskResult
from syskit.core.settings import AppSettings, load_settings
from syskit.core.state import config as global_config
from syskit.inventory import build_inventory
from syskit.tasks import as_result
from syskit.utils.logger import logger

Operation = Callable[..., SubTaskResult]


@automated_step("Run Operation")
def _operation_task(task: Task, operation: Operation, op_args: tuple, op_kwargs: dict) -> Result:
    """Nornir task running one syskit operation on the current host."""
    return as_result(task, operation(task, *op_args, **op_kwargs))


def build_nornir(settings: AppSettings, target: Optional[str] = None) -> Nornir:
    """Nornir bound to the local machine, or to the inventory hosts matching `target`."""
    return Nornir(inventory=build_inventory(settings, target), runner=SerialRunner())


def execute_operation(
        operation: Operation,
        *args: Any,
        target: Optional[str] = None,
        settings: Optional[AppSettings] = None,
        **kwargs: Any
) -> bool:
    """
    Runs `operation(task, *args, **kwargs)` on every targeted host.

    Args:
        operation: A syskit operation (e.g. tasks.files.file_exists)
        target: Inventory host or group name; None runs on the local machine
        settings: Settings injected in the host data (loaded from disk by default)

    Returns:
        True when the operation succeeded on every host.
    """
    settings = settings or load_settings(global_config.CONFIG_FILE)
    nr = build_nornir(settings, target)

    host_count = len(nr.inventory.hosts)
    if host_count == 0:
        logger.error(f"No hosts found matching target '{target}'.")
        return False

    multi_host = host_count > 1
    if multi_host and global_config.VERBOSE:
        logger.console.print(Panel.fit(
            f"[bold white]{operation.__name__}[/bold white] on {host_count} hosts",
            border_style="blue"
        ))

    result: AggregatedResult = nr.run(
        task=_operation_task,
        name=operation.__name__,
        operation=operation,
        op_args=args,
        op_kwargs=kwargs,
    )

    if multi_host:
        return _print_summary(result)
    return not result.failed


def _print_summary(agg_result: AggregatedResult) -> bool:
    """Internal helper to print the final execution summary."""
    failed_hosts = []
    success_hosts = []

    for host, multi_result in agg_result.items():
        if multi_result.failed:
            failed_hosts.append(host)
        else:
            success_hosts.append(host)

    if not global_config.VERBOSE:
        return not failed_hosts

    logger.console.print("\n[bold]Execution Summary[/bold]")
    logger.console.print("─" * 30)

    if success_hosts:
        logger.console.print(f"[bold green]Success ({len(success_hosts)}):[/bold green] {', '.join(success_hosts)}")

    if failed_hosts:
        logger.console.print(f"[bold red]Failed ({len(failed_hosts)}):[/bold red] {', '.join(failed_hosts)}")

    return not failed_hosts
