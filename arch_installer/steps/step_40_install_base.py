from __future__ import annotations

from typing import List

from ..install_config import InstallConfig
from ..lib.command import Link, cmd
from ..planner import PartitionPlan


class InstallBaseSystemStep:
    step_id = "40_install_base"
    label = "Installing base system"

    def links(self, cfg: InstallConfig, plan: PartitionPlan) -> List[Link]:
        return [cmd("pacstrap", cfg.mount_point, *cfg.base_packages)]
