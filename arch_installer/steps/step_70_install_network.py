from __future__ import annotations

from typing import List

from ..install_config import InstallConfig
from ..lib.chroot import chroot_cmd
from ..lib.command import Link
from ..planner import PartitionPlan


class InstallNetworkStep:
    step_id = "70_install_network"
    label = "Installing network utilities"

    def links(self, cfg: InstallConfig, plan: PartitionPlan) -> List[Link]:
        mnt = cfg.mount_point
        return [
            chroot_cmd(mnt, "pacman", "-S", "networkmanager", "--noconfirm"),
            chroot_cmd(mnt, "systemctl", "enable", "NetworkManager"),
        ]
