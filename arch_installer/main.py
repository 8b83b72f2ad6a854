from __future__ import annotations

import argparse
import functools
import logging
from typing import Callable, List, Optional

from rich.console import Console
from rich.markup import escape

from . import __version__
from .config_store import build_config, load_overrides
from .confirm import confirm
from .errors import InstallerError, StepFailure
from .install_config import InstallConfig
from .lib.command import run_chain
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import Completed, FailedAt, Step, run_pipeline
from .planner import PartitionPlan, plan_partitions
from .preflight import Probes, require_root, validate
from .reporting import make_reporter
from .steps import (
    ConfigureSystemStep,
    CreateUserStep,
    FinalizeStep,
    FormatPartitionsStep,
    GenerateFstabStep,
    InstallBaseSystemStep,
    InstallBootloaderStep,
    InstallNetworkStep,
    MountPartitionsStep,
    PartitionDiskStep,
    SetRootPasswordStep,
)

logger = logging.getLogger(__name__)


STEP_CLASSES = (
    PartitionDiskStep,
    FormatPartitionsStep,
    MountPartitionsStep,
    InstallBaseSystemStep,
    GenerateFstabStep,
    ConfigureSystemStep,
    InstallBootloaderStep,
    InstallNetworkStep,
    SetRootPasswordStep,
    CreateUserStep,
    FinalizeStep,
)


def build_steps(cfg: InstallConfig, plan: PartitionPlan) -> List[Step]:
    steps = []
    for cls in STEP_CLASSES:
        s = cls()
        links = s.links(cfg, plan)
        steps.append(
            Step(
                step_id=s.step_id,
                label=s.label.format_map(cfg.as_dict()),
                action=functools.partial(run_chain, links, dry_run=cfg.dry_run),
            )
        )
    return steps


def run(
    cfg: InstallConfig,
    *,
    probes: Optional[Probes] = None,
    console: Optional[Console] = None,
    read_line: Optional[Callable[[], str]] = None,
    progress: str = "animated",
    assume_yes: bool = False,
    show_secrets: bool = False,
) -> Completed:
    """Validate, plan, confirm, then run every step.

    Raises ValidationError, UserAborted or StepFailure; never returns a
    partial result.
    """

    console = console or Console()
    probes = probes or Probes.live()

    if not cfg.dry_run:
        require_root()

    capacity_mib = validate(cfg, probes)
    plan = plan_partitions(cfg)
    logger.info("Partition plan: %s", plan)

    if assume_yes:
        logger.info("Confirmation skipped (--yes)")
    else:
        confirm(
            cfg,
            plan,
            console=console,
            read_line=read_line,
            capacity_mib=capacity_mib,
            show_secrets=show_secrets,
        )

    if cfg.dry_run:
        console.print("[yellow]Dry run: commands are logged, not executed.[/]")

    result = run_pipeline(steps=build_steps(cfg, plan), reporter=make_reporter(progress, console))
    if isinstance(result, FailedAt):
        raise StepFailure(result.index, result.label, result.cause)

    console.print("[bold green]Installation complete.[/]")
    console.print("[bold green]System ready for reboot.[/]")
    return result


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="arch-installer")
    p.add_argument("--config", default=None, help="Config overrides (json|yaml)")
    p.add_argument("--device", default=None, help="Target disk (e.g. /dev/sda)")
    p.add_argument("--hostname", default=None)
    p.add_argument("--username", default=None)
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to installer log")
    p.add_argument("--progress", choices=["animated", "immediate"], default="animated")
    p.add_argument("--yes", action="store_true", help="Do not ask for confirmation")
    p.add_argument("--dry-run", action="store_true", help="Log commands without running them")
    p.add_argument(
        "--reject-exact-fit",
        action="store_true",
        help="Refuse a disk that is exactly as large as required",
    )
    p.add_argument("--show-secrets", action="store_true", help="Show passwords in the summary")
    p.add_argument("--verbose", action="store_true", help="Also log to stderr")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = p.parse_args(argv)

    configure_logging(log_path=args.log, also_console=args.verbose)
    console = Console()

    try:
        overrides = load_overrides(args.config) if args.config else {}
        cfg = build_config(
            overrides,
            device=args.device,
            hostname=args.hostname,
            username=args.username,
            dry_run=True if args.dry_run else None,
            reject_exact_fit=True if args.reject_exact_fit else None,
        )
        run(
            cfg,
            console=console,
            progress=args.progress,
            assume_yes=args.yes,
            show_secrets=args.show_secrets,
        )
    except InstallerError as e:
        logger.error("Installer stopped: %s", e)
        console.print(f"[bold red]{escape(str(e))}[/]")
        return e.exit_code
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
