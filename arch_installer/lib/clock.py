from __future__ import annotations

import logging

from .command import run_cmd

logger = logging.getLogger(__name__)

SYNCED_MARKER = "System clock synchronized: yes"


def clock_synchronized() -> bool:
    """Ask timedatectl whether NTP has synchronized the system clock."""

    try:
        r = run_cmd(["timedatectl", "status"], check=False)
    except OSError as e:
        logger.warning("timedatectl unavailable: %s", e)
        return False
    if r.returncode != 0:
        return False
    return any(line.strip() == SYNCED_MARKER for line in r.stdout.splitlines())
