from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Callable

from .errors import ValidationError
from .install_config import InstallConfig, bytes_to_mib
from .lib import block, clock, firmware, net

logger = logging.getLogger(__name__)

SAFETY_MARGIN_MIB = 100


@dataclass(frozen=True)
class Probes:
    """Read-only views of the live environment.

    Tests swap these for fakes; `Probes.live()` wires the real ones.
    """

    is_block_device: Callable[[str], bool]
    device_size_bytes: Callable[[str], int]
    is_online: Callable[[str], bool]
    is_uefi: Callable[[], bool]
    clock_synchronized: Callable[[], bool]

    @classmethod
    def live(cls) -> "Probes":
        return cls(
            is_block_device=block.is_block_device,
            device_size_bytes=block.device_size_bytes,
            is_online=net.is_online,
            is_uefi=firmware.is_uefi,
            clock_synchronized=clock.clock_synchronized,
        )


def required_capacity_mib(cfg: InstallConfig) -> int:
    return cfg.fixed_size_mib + SAFETY_MARGIN_MIB


def capacity_ok(cfg: InstallConfig, available_mib: int) -> bool:
    required = required_capacity_mib(cfg)
    if cfg.reject_exact_fit:
        return available_mib > required
    return available_mib >= required


def require_root() -> None:
    if os.geteuid() != 0:
        raise ValidationError("This installer must be run as root.")


def validate(cfg: InstallConfig, probes: Probes) -> int:
    """Check every precondition in order; raise on the first failure.

    Returns the device capacity in MiB so callers do not probe twice.
    """

    dev = cfg.device
    if not probes.is_block_device(dev):
        raise ValidationError(f"Disk {dev} does not exist or is not a block device. Please check the disk name.")

    try:
        available = bytes_to_mib(probes.device_size_bytes(dev))
    except (OSError, RuntimeError) as e:
        raise ValidationError(f"Unable to read the size of {dev}: {e}") from e
    required = required_capacity_mib(cfg)
    if not capacity_ok(cfg, available):
        raise ValidationError(
            f"Disk {dev} is too small. Required: {required} MiB, Available: {available} MiB."
        )
    logger.info("Disk %s: %s MiB available, %s MiB required", dev, available, required)

    if not probes.is_online(cfg.ping_host):
        raise ValidationError("No internet connection. Please connect to the internet before proceeding.")

    if not probes.is_uefi():
        raise ValidationError("This installer supports only UEFI mode. Please boot in UEFI mode.")

    if not probes.clock_synchronized():
        raise ValidationError("System clock is not synchronized. Please enable NTP or set the time manually.")

    logger.info("Preflight checks passed")
    return available
