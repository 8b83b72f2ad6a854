from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    input_text: str | None = None,
    dry_run: bool = False,
) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command (never its stdin, which may hold credentials).
    - Captures stdout/stderr.
    - dry_run logs but does not execute.
    """

    argv_list = list(argv)
    logger.info("CMD %s", _fmt_argv(argv_list))

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

    p = subprocess.run(
        argv_list,
        input=input_text,
        text=True,
        # tools may print non-UTF-8 bytes (locale-gen, pacstrap progress)
        encoding="utf-8",
        errors="replace",
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        cwd=cwd,
        env=dict(os.environ, **(env or {})),
    )

    if p.stdout:
        logger.debug("STDOUT %s", p.stdout.strip())
    if p.stderr:
        logger.debug("STDERR %s", p.stderr.strip())

    if check and p.returncode != 0:
        raise RuntimeError(f"Command failed ({p.returncode}): {_fmt_argv(argv_list)}\n{p.stderr}")

    return CmdResult(argv=argv_list, returncode=p.returncode, stdout=p.stdout, stderr=p.stderr)


@dataclass(frozen=True)
class Command:
    """One external process in a chain.

    append_to sends stdout to the end of a file, like `>>`.
    """

    argv: Tuple[str, ...]
    input_text: Optional[str] = None
    append_to: Optional[str] = None

    def describe(self) -> str:
        text = _fmt_argv(self.argv)
        if self.append_to:
            text += f" >> {self.append_to}"
        return text


@dataclass(frozen=True)
class WriteFile:
    path: str
    contents: str
    append: bool = False

    def describe(self) -> str:
        return f"{'append' if self.append else 'write'} {self.path}"


Link = Union[Command, WriteFile]


def cmd(*argv: str, **kwargs) -> Command:
    return Command(argv=tuple(argv), **kwargs)


@dataclass(frozen=True)
class ChainResult:
    ok: bool
    completed: int
    failed_link: Optional[str] = None
    returncode: Optional[int] = None
    detail: str = ""

    @property
    def cause(self) -> str:
        if self.ok:
            return ""
        parts = [f"`{self.failed_link}`"]
        if self.returncode is not None:
            parts.append(f"exited with {self.returncode}")
        if self.detail:
            parts.append(f"({self.detail})")
        return " ".join(parts)


def _write(path: str, contents: str, *, append: bool, dry_run: bool) -> None:
    if dry_run:
        logger.info("Would %s %s", "append to" if append else "write", path)
        return
    p = Path(path)
    with p.open("a" if append else "w", encoding="utf-8") as f:
        f.write(contents)
    logger.info("%s %s", "Appended to" if append else "Wrote", path)


def _run_link(link: Link, *, dry_run: bool) -> CmdResult:
    if isinstance(link, WriteFile):
        _write(link.path, link.contents, append=link.append, dry_run=dry_run)
        return CmdResult(argv=[], returncode=0, stdout="", stderr="")

    r = run_cmd(link.argv, check=False, input_text=link.input_text, dry_run=dry_run)
    if link.append_to and r.returncode == 0:
        _write(link.append_to, r.stdout, append=True, dry_run=dry_run)
    return r


def run_chain(links: Sequence[Link], *, dry_run: bool = False) -> ChainResult:
    """Run links in order, stopping at the first failure (shell `&&`)."""

    for n, link in enumerate(links):
        try:
            r = _run_link(link, dry_run=dry_run)
        except (OSError, UnicodeError) as e:
            # Missing binary, unwritable target file, undecodable output
            logger.error("Chain aborted at %s: %s", link.describe(), e)
            return ChainResult(ok=False, completed=n, failed_link=link.describe(), detail=str(e))

        if r.returncode != 0:
            stderr = (r.stderr or "").strip()
            logger.error("Chain aborted at %s (rc=%s)", link.describe(), r.returncode)
            return ChainResult(
                ok=False,
                completed=n,
                failed_link=link.describe(),
                returncode=r.returncode,
                detail=stderr.splitlines()[-1] if stderr else "",
            )

    return ChainResult(ok=True, completed=len(links))
