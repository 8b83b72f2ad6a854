from __future__ import annotations

from typing import List

from ..install_config import InstallConfig
from ..lib.command import Link, cmd
from ..planner import PartitionPlan


class FinalizeStep:
    step_id = "90_finalize"
    label = "Unmounting partitions"

    def links(self, cfg: InstallConfig, plan: PartitionPlan) -> List[Link]:
        return [
            cmd("umount", "-R", cfg.mount_point),
            cmd("swapoff", "-a"),
        ]
