from __future__ import annotations

import enum
import logging
import sys
from typing import Callable, List, Optional

from rich.console import Console
from rich.markup import escape

from .errors import UserAborted
from .install_config import InstallConfig, config_field_names
from .planner import REMAINDER, PartitionPlan

logger = logging.getLogger(__name__)

AFFIRMATIVE_TOKEN = "y"
PROMPT = f"Continue with these settings? ({AFFIRMATIVE_TOKEN}/n): "


class Decision(enum.Enum):
    PROCEED = "proceed"


def _secret(value: str, show: bool) -> str:
    return value if show else "*" * len(value)


# One summary line per InstallConfig field, shown in field order.
SUMMARY_LABELS = {
    "device": "Disk",
    "boot_size_mib": "Boot partition size",
    "swap_size_mib": "Swap partition size",
    "root_size_mib": "Root partition size",
    "timezone": "Timezone",
    "locale": "Locale",
    "keymap": "Keymap",
    "hostname": "Hostname",
    "root_password": "Root password",
    "username": "Username",
    "user_password": "User password",
    "mount_point": "Mount point",
    "ping_host": "Connectivity check host",
    "base_packages": "Base packages",
    "admin_group": "Admin group",
    "user_shell": "User shell",
    "reject_exact_fit": "Reject exact fit",
    "dry_run": "Dry run",
}

_SECRET_FIELDS = ("root_password", "user_password")


def _display(cfg: InstallConfig, name: str, show_secrets: bool) -> str:
    value = getattr(cfg, name)
    if name in _SECRET_FIELDS:
        return _secret(value, show_secrets)
    if name.endswith("_size_mib"):
        return f"{value} MiB (fixed)" if name == "boot_size_mib" else f"{value} MiB"
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, tuple):
        return " ".join(value)
    return str(value)


def render_summary(
    cfg: InstallConfig,
    plan: PartitionPlan,
    *,
    capacity_mib: Optional[int] = None,
    show_secrets: bool = False,
) -> List[str]:
    lines = []
    for name in config_field_names():
        lines.append(f"{SUMMARY_LABELS[name]}: {_display(cfg, name, show_secrets)}")
        if name == "root_size_mib":
            lines.append("Remaining space will be used for /home.")
    lines.append("Partition layout:")

    for p in plan.partitions:
        start, end = p.bounds(capacity_mib)
        if p.end_mib is REMAINDER:
            end_txt = f"{end} MiB (end of disk)" if end is not None else "end of disk"
        else:
            end_txt = f"{end} MiB"
        lines.append(
            f"  {plan.partition_path(p.role)}  {p.role:<4}  {p.fs_kind:<10}  {start} MiB -> {end_txt}"
        )
    return lines


def confirm(
    cfg: InstallConfig,
    plan: PartitionPlan,
    *,
    console: Optional[Console] = None,
    read_line: Optional[Callable[[], str]] = None,
    capacity_mib: Optional[int] = None,
    show_secrets: bool = False,
) -> Decision:
    """Show the plan and wait for a single yes/no answer.

    Only the exact token "y" proceeds; anything else, EOF included, aborts.
    """

    console = console or Console()
    read_line = read_line or sys.stdin.readline

    console.print("[bold green]Settings:[/]")
    for line in render_summary(cfg, plan, capacity_mib=capacity_mib, show_secrets=show_secrets):
        console.print(escape(line), highlight=False)

    console.print(PROMPT, end="", markup=False, highlight=False)
    answer = read_line()
    if answer.endswith("\n"):
        answer = answer[:-1]
    if answer.endswith("\r"):
        answer = answer[:-1]

    if answer != AFFIRMATIVE_TOKEN:
        logger.info("Confirmation declined (answer=%r)", answer)
        raise UserAborted("Installation canceled.")

    logger.info("Confirmation accepted")
    return Decision.PROCEED
