from __future__ import annotations

import logging
import os
import stat

from .command import run_cmd

logger = logging.getLogger(__name__)


def is_block_device(dev: str) -> bool:
    try:
        st = os.stat(dev)
    except OSError:
        return False
    return stat.S_ISBLK(st.st_mode)


def device_size_bytes(dev: str) -> int:
    """Return the capacity of a block device in bytes."""

    r = run_cmd(["blockdev", "--getsize64", dev])
    out = (r.stdout or "").strip()
    if not out.isdigit():
        raise RuntimeError(f"Unable to determine size of {dev}: {out!r}")
    return int(out)


def partition_path(disk: str, n: int) -> str:
    # nvme/mmcblk devices use p suffix
    if disk.endswith(tuple("0123456789")):
        return f"{disk}p{n}"
    return f"{disk}{n}"
