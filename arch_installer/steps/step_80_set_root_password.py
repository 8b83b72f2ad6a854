from __future__ import annotations

from typing import List

from ..install_config import InstallConfig
from ..lib.chroot import chroot_cmd
from ..lib.command import Link
from ..planner import PartitionPlan


class SetRootPasswordStep:
    step_id = "80_set_root_password"
    label = "Setting root password"

    def links(self, cfg: InstallConfig, plan: PartitionPlan) -> List[Link]:
        # chpasswd reads user:password on stdin so it never shows up in argv or logs
        return [chroot_cmd(cfg.mount_point, "chpasswd", input_text=f"root:{cfg.root_password}\n")]
