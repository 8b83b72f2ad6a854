from __future__ import annotations

from typing import List

from ..install_config import InstallConfig
from ..lib.chroot import target_path
from ..lib.command import Link, cmd
from ..planner import PartitionPlan


class GenerateFstabStep:
    step_id = "45_generate_fstab"
    label = "Generating fstab"

    def links(self, cfg: InstallConfig, plan: PartitionPlan) -> List[Link]:
        # -U: reference filesystems by UUID
        return [
            cmd(
                "genfstab",
                "-U",
                cfg.mount_point,
                append_to=target_path(cfg.mount_point, "/etc/fstab"),
            )
        ]
