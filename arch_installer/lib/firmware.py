from __future__ import annotations

from pathlib import Path

from .env import PATHS


def is_uefi(efi_path: str = PATHS.efi_firmware) -> bool:
    """True when the running environment was booted through UEFI.

    The kernel only exposes /sys/firmware/efi on UEFI boots.
    """

    return Path(efi_path).is_dir()
