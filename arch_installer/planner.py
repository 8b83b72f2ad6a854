from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .install_config import InstallConfig
from .lib.block import partition_path


class _Remainder:
    """End marker for a partition that takes the rest of the disk."""

    _instance: Optional["_Remainder"] = None

    def __new__(cls) -> "_Remainder":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "REMAINDER"


REMAINDER = _Remainder()

ROLES = ("boot", "swap", "root", "home")

FS_KINDS = {
    "boot": "fat32",
    "swap": "linux-swap",
    "root": "ext4",
    "home": "ext4",
}

Offset = Union[int, _Remainder]


@dataclass(frozen=True)
class PartitionSpec:
    number: int
    role: str
    start_mib: int
    end_mib: Offset
    fs_kind: str

    @property
    def size_mib(self) -> Optional[int]:
        if self.end_mib is REMAINDER:
            return None
        return self.end_mib - self.start_mib

    def bounds(self, capacity_mib: Optional[int] = None) -> Tuple[int, Optional[int]]:
        """Concrete [start, end) once the disk capacity is known."""

        if self.end_mib is REMAINDER:
            return self.start_mib, capacity_mib
        return self.start_mib, self.end_mib


@dataclass(frozen=True)
class PartitionPlan:
    device: str
    partitions: Tuple[PartitionSpec, ...]

    def by_role(self, role: str) -> PartitionSpec:
        for p in self.partitions:
            if p.role == role:
                return p
        raise KeyError(role)

    def partition_path(self, role: str) -> str:
        return partition_path(self.device, self.by_role(role).number)

    @property
    def home_start_mib(self) -> int:
        return self.by_role("home").start_mib


def plan_partitions(cfg: InstallConfig) -> PartitionPlan:
    """Lay out boot, swap, root back to back; home takes what is left.

    Capacity is not re-checked here, preflight already did.
    """

    sizes = {
        "boot": cfg.boot_size_mib,
        "swap": cfg.swap_size_mib,
        "root": cfg.root_size_mib,
    }

    parts = []
    offset = 0
    for n, role in enumerate(ROLES, start=1):
        if role == "home":
            end: Offset = REMAINDER
        else:
            end = offset + sizes[role]
        parts.append(
            PartitionSpec(number=n, role=role, start_mib=offset, end_mib=end, fs_kind=FS_KINDS[role])
        )
        if end is not REMAINDER:
            offset = end

    return PartitionPlan(device=cfg.device, partitions=tuple(parts))


def parted_offset(value: Offset) -> str:
    """Render an offset the way parted expects it.

    Offset 0 becomes 1MiB so the first partition is aligned.
    """

    if value is REMAINDER:
        return "100%"
    if value == 0:
        return "1MiB"
    return f"{value}MiB"
