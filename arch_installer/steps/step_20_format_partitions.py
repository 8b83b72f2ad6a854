from __future__ import annotations

from typing import List

from ..install_config import InstallConfig
from ..lib.command import Link, cmd
from ..planner import PartitionPlan

# fs_kind -> formatter argv prefix
FORMATTERS = {
    "fat32": ("mkfs.fat", "-F32"),
    "linux-swap": ("mkswap",),
    "ext4": ("mkfs.ext4", "-F"),
}


class FormatPartitionsStep:
    step_id = "20_format_partitions"
    label = "Formatting partitions"

    def links(self, cfg: InstallConfig, plan: PartitionPlan) -> List[Link]:
        return [
            cmd(*FORMATTERS[p.fs_kind], plan.partition_path(p.role))
            for p in plan.partitions
        ]
