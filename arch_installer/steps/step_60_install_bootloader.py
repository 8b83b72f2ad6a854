from __future__ import annotations

from typing import List

from ..install_config import InstallConfig
from ..lib.chroot import chroot_cmd, target_path
from ..lib.command import Link, WriteFile
from ..planner import PartitionPlan

ENTRY_NAME = "arch"


def loader_conf() -> str:
    return f"default {ENTRY_NAME}\ntimeout 3\nconsole-mode max\n"


def boot_entry(root_part: str) -> str:
    return (
        "title   Arch Linux\n"
        "linux   /vmlinuz-linux\n"
        "initrd  /initramfs-linux.img\n"
        f"options root={root_part} rw\n"
    )


class InstallBootloaderStep:
    step_id = "60_install_bootloader"
    label = "Installing systemd-boot"

    def links(self, cfg: InstallConfig, plan: PartitionPlan) -> List[Link]:
        mnt = cfg.mount_point
        return [
            chroot_cmd(mnt, "bootctl", "--path=/boot", "install"),
            WriteFile(target_path(mnt, "/boot/loader/loader.conf"), loader_conf()),
            WriteFile(
                target_path(mnt, f"/boot/loader/entries/{ENTRY_NAME}.conf"),
                boot_entry(plan.partition_path("root")),
            ),
        ]
