from __future__ import annotations

from pathlib import PurePosixPath
from typing import Optional

from .command import Command


def chroot_cmd(target_root: str, *argv: str, input_text: Optional[str] = None) -> Command:
    """Build a command that runs inside the installed system."""

    return Command(argv=("arch-chroot", target_root, *argv), input_text=input_text)


def target_path(target_root: str, rel: str) -> str:
    """Host path of `rel` inside the target root."""

    return str(PurePosixPath(target_root) / rel.lstrip("/"))
