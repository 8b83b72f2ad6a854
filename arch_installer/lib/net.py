from __future__ import annotations

import logging

from .command import run_cmd

logger = logging.getLogger(__name__)


def is_online(host: str = "archlinux.org") -> bool:
    """Liveness check: one ICMP echo to `host`."""

    try:
        r = run_cmd(["ping", "-c", "1", "-W", "2", host], check=False)
    except OSError as e:
        logger.warning("ping unavailable: %s", e)
        return False
    return r.returncode == 0
