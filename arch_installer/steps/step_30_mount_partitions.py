from __future__ import annotations

from typing import List

from ..install_config import InstallConfig
from ..lib.chroot import target_path
from ..lib.command import Link, cmd
from ..planner import PartitionPlan


class MountPartitionsStep:
    step_id = "30_mount_partitions"
    label = "Mounting partitions"

    def links(self, cfg: InstallConfig, plan: PartitionPlan) -> List[Link]:
        mnt = cfg.mount_point
        boot = target_path(mnt, "/boot")
        home = target_path(mnt, "/home")
        return [
            cmd("mount", plan.partition_path("root"), mnt),
            cmd("mkdir", "-p", boot),
            cmd("mount", plan.partition_path("boot"), boot),
            cmd("swapon", plan.partition_path("swap")),
            cmd("mkdir", "-p", home),
            cmd("mount", plan.partition_path("home"), home),
        ]
