from __future__ import annotations

import re
from dataclasses import dataclass, fields
from typing import Any, Dict, Tuple, Union

from .errors import ConfigError

MIB = 1024 * 1024

_SIZE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([A-Za-z]*)\s*$")

# GB is treated as GiB, matching how the partitioning tool is fed whole MiB.
_MIB_UNITS = ("", "m", "mb", "mib")
_GIB_UNITS = ("g", "gb", "gib")

_STR_FIELDS = (
    "device",
    "timezone",
    "locale",
    "keymap",
    "hostname",
    "root_password",
    "username",
    "user_password",
    "mount_point",
    "ping_host",
    "admin_group",
    "user_shell",
)
_BOOL_FIELDS = ("reject_exact_fit", "dry_run")


def gb_to_mib(gb: Union[int, float]) -> int:
    return int(round(gb * 1024))


def bytes_to_mib(n: int) -> int:
    return n // MIB


def parse_size_mib(value: Union[int, str]) -> int:
    """Parse a size into whole MiB.

    Ints are taken as MiB already. Strings may carry an M/MiB or G/GiB/GB
    suffix, e.g. "512M", "18G", "2.5GiB".
    """

    if isinstance(value, bool):
        raise ConfigError(f"Invalid size: {value!r}")
    if isinstance(value, int):
        return value

    m = _SIZE_RE.match(str(value))
    if not m:
        raise ConfigError(f"Invalid size: {value!r}")

    number, unit = m.groups()
    unit = unit.lower()
    if unit not in _MIB_UNITS + _GIB_UNITS:
        raise ConfigError(f"Unknown size unit {unit!r} in {value!r}")

    amount = float(number)
    mib = amount * 1024 if unit in _GIB_UNITS else amount
    if not mib.is_integer():
        raise ConfigError(f"Size {value!r} is not a whole number of MiB")
    return gb_to_mib(amount) if unit in _GIB_UNITS else int(mib)


@dataclass(frozen=True)
class InstallConfig:
    device: str = "/dev/sda"

    boot_size_mib: int = 512
    swap_size_mib: int = 2048
    root_size_mib: int = 18432

    timezone: str = "Europe/Moscow"
    locale: str = "en_US.UTF-8"
    keymap: str = "us"
    hostname: str = "arch"

    root_password: str = "arch"
    username: str = "user"
    user_password: str = "password"

    mount_point: str = "/mnt"
    ping_host: str = "archlinux.org"
    base_packages: Tuple[str, ...] = ("base", "linux", "linux-firmware")
    admin_group: str = "wheel"
    user_shell: str = "/bin/bash"

    # When set, a disk that is exactly big enough is rejected as well.
    reject_exact_fit: bool = False
    dry_run: bool = False

    @property
    def fixed_size_mib(self) -> int:
        return self.boot_size_mib + self.swap_size_mib + self.root_size_mib

    def validate(self) -> "InstallConfig":
        # Values from YAML/JSON arrive untyped: `dry_run: "false"` is a
        # truthy string, `device: 5` an int.
        for name in _STR_FIELDS:
            v = getattr(self, name)
            if not isinstance(v, str):
                raise ConfigError(f"{name} must be a string, got {type(v).__name__} {v!r}")

        for name in _BOOL_FIELDS:
            v = getattr(self, name)
            if not isinstance(v, bool):
                raise ConfigError(f"{name} must be true or false, got {type(v).__name__} {v!r}")

        if not isinstance(self.base_packages, tuple) or not all(
            isinstance(p, str) for p in self.base_packages
        ):
            raise ConfigError(f"base_packages must be a list of package names, got {self.base_packages!r}")

        if not self.device.strip():
            raise ConfigError("device must be a non-empty path")

        for name in ("boot_size_mib", "swap_size_mib", "root_size_mib"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int) or v <= 0:
                raise ConfigError(f"{name} must be a positive integer, got {v!r}")

        for name in ("hostname", "username", "timezone", "locale", "keymap"):
            if not getattr(self, name).strip():
                raise ConfigError(f"{name} must not be empty")

        if not self.base_packages:
            raise ConfigError("base_packages must list at least one package")

        return self

    def as_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def config_field_names() -> Tuple[str, ...]:
    return tuple(f.name for f in fields(InstallConfig))
