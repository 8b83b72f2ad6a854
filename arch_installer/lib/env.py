from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    mount_point: str = "/mnt"
    efi_firmware: str = "/sys/firmware/efi"
    zoneinfo: str = "/usr/share/zoneinfo"
    log_default: str = "/var/log/arch-installer.log"


PATHS = Paths()
