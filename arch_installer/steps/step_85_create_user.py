from __future__ import annotations

from typing import List

from ..install_config import InstallConfig
from ..lib.chroot import chroot_cmd, target_path
from ..lib.command import Link, WriteFile
from ..planner import PartitionPlan


class CreateUserStep:
    step_id = "85_create_user"
    label = "Creating user {username}"

    def links(self, cfg: InstallConfig, plan: PartitionPlan) -> List[Link]:
        mnt = cfg.mount_point
        user = cfg.username
        return [
            chroot_cmd(mnt, "useradd", "-m", "-G", cfg.admin_group, "-s", cfg.user_shell, user),
            chroot_cmd(mnt, "chpasswd", input_text=f"{user}:{cfg.user_password}\n"),
            WriteFile(target_path(mnt, "/etc/sudoers"), f"{user} ALL=(ALL) ALL\n", append=True),
        ]
