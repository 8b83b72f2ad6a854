from __future__ import annotations

from typing import List

from ..install_config import InstallConfig
from ..lib.command import Link, cmd
from ..planner import PartitionPlan, parted_offset


class PartitionDiskStep:
    step_id = "10_partition_disk"
    label = "Partitioning disk"

    def links(self, cfg: InstallConfig, plan: PartitionPlan) -> List[Link]:
        disk = plan.device
        out: List[Link] = [cmd("parted", "-s", disk, "mklabel", "gpt")]

        for p in plan.partitions:
            out.append(
                cmd(
                    "parted",
                    "-s",
                    disk,
                    "mkpart",
                    "primary",
                    p.fs_kind,
                    parted_offset(p.start_mib),
                    parted_offset(p.end_mib),
                )
            )
            if p.role == "boot":
                out.append(cmd("parted", "-s", disk, "set", str(p.number), "esp", "on"))

        return out
