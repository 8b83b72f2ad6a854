"""
Pytest configuration and shared fixtures for arch-installer tests.

Nothing here touches a real disk: probes are fakes and commands are mocked
or run in dry-run mode.
"""

import io
from dataclasses import replace
from typing import Dict
from unittest.mock import Mock

import pytest
from rich.console import Console

from arch_installer.install_config import MIB, InstallConfig
from arch_installer.planner import plan_partitions
from arch_installer.preflight import Probes


@pytest.fixture
def config() -> InstallConfig:
    """Default settings aimed at a virtual disk."""
    return replace(InstallConfig(), device="/virtual/disk0").validate()


@pytest.fixture
def plan(config):
    return plan_partitions(config)


@pytest.fixture
def probe_state() -> Dict[str, object]:
    """Mutable knobs behind the fake probes."""
    return {
        "block_device": True,
        "capacity_mib": 30000,
        "online": True,
        "uefi": True,
        "clock": True,
    }


@pytest.fixture
def probes(probe_state) -> Probes:
    return Probes(
        is_block_device=Mock(side_effect=lambda dev: probe_state["block_device"]),
        device_size_bytes=Mock(side_effect=lambda dev: probe_state["capacity_mib"] * MIB),
        is_online=Mock(side_effect=lambda host: probe_state["online"]),
        is_uefi=Mock(side_effect=lambda: probe_state["uefi"]),
        clock_synchronized=Mock(side_effect=lambda: probe_state["clock"]),
    )


@pytest.fixture
def console_output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(console_output) -> Console:
    """A plain (no colour, no terminal) console writing into a buffer."""
    return Console(file=console_output, force_terminal=False, color_system=None, width=120)


@pytest.fixture
def mock_subprocess_run(mocker) -> Mock:
    run = mocker.patch("arch_installer.lib.command.subprocess.run")
    run.return_value = Mock(returncode=0, stdout="", stderr="")
    return run
