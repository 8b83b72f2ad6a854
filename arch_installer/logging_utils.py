from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import List, Optional, Tuple

from rich.console import Console
from rich.logging import RichHandler

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default
LOG_FILE_NAME = "arch-installer.log"

_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_active_log_path: Optional[str] = None


def log_candidates(log_path: str) -> List[str]:
    """Where the log may go, best first.

    On the Arch ISO /var/log sits on the overlay and is normally writable,
    but a read-only or full cowspace breaks that; the working directory and
    then the temp dir are tried next.
    """

    out: List[str] = []
    for p in (log_path, str(Path.cwd() / LOG_FILE_NAME), str(Path(tempfile.gettempdir()) / LOG_FILE_NAME)):
        if p not in out:
            out.append(p)
    return out


def _open_log_file(log_path: str) -> Tuple[logging.FileHandler, str]:
    last_error: Optional[OSError] = None
    for path in log_candidates(log_path):
        try:
            Path(path).parent.mkdir(parents=True, exist_ok=True)
            return logging.FileHandler(path, encoding="utf-8"), path
        except OSError as e:
            last_error = e
    raise OSError(f"No writable location for the installer log: {last_error}")


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = False,
) -> str:
    """Send the installer log to a file, and to stderr with --verbose.

    The file receives every command line run (never its stdin). The stderr
    copy goes through rich so it does not garble the step status lines.
    Calling this twice keeps the first setup. Returns the log file path.
    """

    global _active_log_path
    if _active_log_path is not None:
        return _active_log_path

    root = logging.getLogger()
    root.setLevel(level)

    file_handler, chosen = _open_log_file(log_path)
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z"))
    root.addHandler(file_handler)

    if also_console:
        root.addHandler(RichHandler(console=Console(stderr=True), show_time=False, show_path=False))

    _active_log_path = chosen
    if chosen != log_path:
        logging.getLogger(__name__).warning("Cannot write %s; logging to %s", log_path, chosen)
    logging.getLogger(__name__).info("Logging to %s", chosen)
    return chosen
