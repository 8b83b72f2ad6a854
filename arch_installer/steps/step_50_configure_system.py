from __future__ import annotations

from typing import List

from ..install_config import InstallConfig
from ..lib.chroot import chroot_cmd, target_path
from ..lib.command import Link, WriteFile
from ..lib.env import PATHS
from ..planner import PartitionPlan


def locale_charset(locale: str) -> str:
    # en_US.UTF-8 -> UTF-8; bare locales fall back to UTF-8
    _, _, charset = locale.partition(".")
    return charset or "UTF-8"


class ConfigureSystemStep:
    step_id = "50_configure_system"
    label = "Configuring system"

    def links(self, cfg: InstallConfig, plan: PartitionPlan) -> List[Link]:
        mnt = cfg.mount_point
        host = cfg.hostname

        return [
            chroot_cmd(mnt, "ln", "-sf", f"{PATHS.zoneinfo}/{cfg.timezone}", "/etc/localtime"),
            chroot_cmd(mnt, "hwclock", "--systohc"),
            WriteFile(
                target_path(mnt, "/etc/locale.gen"),
                f"{cfg.locale} {locale_charset(cfg.locale)}\n",
                append=True,
            ),
            chroot_cmd(mnt, "locale-gen"),
            WriteFile(target_path(mnt, "/etc/locale.conf"), f"LANG={cfg.locale}\n"),
            WriteFile(target_path(mnt, "/etc/vconsole.conf"), f"KEYMAP={cfg.keymap}\n"),
            WriteFile(target_path(mnt, "/etc/hostname"), host + "\n"),
            WriteFile(
                target_path(mnt, "/etc/hosts"),
                "\n".join(
                    [
                        "127.0.0.1 localhost",
                        "::1 localhost",
                        f"127.0.1.1 {host}.localdomain {host}",
                        "",
                    ]
                ),
                append=True,
            ),
        ]
