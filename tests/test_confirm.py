"""Tests for the confirmation prompt."""

import io
from dataclasses import replace

import pytest

from arch_installer.confirm import (
    AFFIRMATIVE_TOKEN,
    PROMPT,
    SUMMARY_LABELS,
    Decision,
    confirm,
    render_summary,
)
from arch_installer.errors import UserAborted
from arch_installer.install_config import config_field_names


def reader(text):
    return io.StringIO(text).readline


class TestConfirm:
    def test_affirmative_proceeds(self, config, plan, console):
        assert confirm(config, plan, console=console, read_line=reader("y\n")) is Decision.PROCEED

    def test_token_without_newline(self, config, plan, console):
        assert confirm(config, plan, console=console, read_line=reader("y")) is Decision.PROCEED

    @pytest.mark.parametrize("answer", ["Y\n", "yes\n", "n\n", "\n", " y\n", "y \n", "yy\n", ""])
    def test_anything_else_aborts(self, config, plan, console, answer):
        with pytest.raises(UserAborted):
            confirm(config, plan, console=console, read_line=reader(answer))

    def test_prompt_is_shown(self, config, plan, console, console_output):
        confirm(config, plan, console=console, read_line=reader("y\n"))

        out = console_output.getvalue()
        assert "Settings:" in out
        assert PROMPT.strip() in out
        assert AFFIRMATIVE_TOKEN == "y"


class TestSummary:
    def test_every_field_in_order(self, config, plan):
        lines = render_summary(config, plan)
        labels = [line.split(":")[0] for line in lines[: lines.index("Partition layout:")]]

        assert labels == [
            "Disk",
            "Boot partition size",
            "Swap partition size",
            "Root partition size",
            "Remaining space will be used for /home.",
            "Timezone",
            "Locale",
            "Keymap",
            "Hostname",
            "Root password",
            "Username",
            "User password",
            "Mount point",
            "Connectivity check host",
            "Base packages",
            "Admin group",
            "User shell",
            "Reject exact fit",
            "Dry run",
        ]

    def test_no_config_field_left_out(self, config, plan):
        lines = render_summary(config, plan)
        layout = lines.index("Partition layout:")
        shown = [line.split(":")[0] for line in lines[:layout] if ":" in line]

        assert set(SUMMARY_LABELS) == set(config_field_names())
        assert shown == [SUMMARY_LABELS[name] for name in config_field_names()]

    def test_remaining_settings_values(self, config, plan):
        lines = render_summary(replace(config, dry_run=True), plan)

        assert "Mount point: /mnt" in lines
        assert "Base packages: base linux linux-firmware" in lines
        assert "Admin group: wheel" in lines
        assert "User shell: /bin/bash" in lines
        assert "Connectivity check host: archlinux.org" in lines
        assert "Reject exact fit: no" in lines
        assert "Dry run: yes" in lines

    def test_secrets_masked_by_default(self, config, plan):
        text = "\n".join(render_summary(config, plan))

        assert "Root password: ****" in text
        assert "User password: ********" in text
        assert "password: password" not in text

    def test_secrets_on_request(self, config, plan):
        text = "\n".join(render_summary(config, plan, show_secrets=True))
        assert "Root password: arch" in text

    def test_partition_lines(self, config, plan):
        lines = render_summary(config, plan, capacity_mib=30000)
        part_lines = lines[lines.index("Partition layout:") + 1 :]

        assert len(part_lines) == 4
        assert "boot" in part_lines[0] and "0 MiB -> 512 MiB" in part_lines[0]
        assert "home" in part_lines[3] and "20992 MiB -> 30000 MiB (end of disk)" in part_lines[3]

    def test_home_without_capacity(self, config, plan):
        lines = render_summary(config, plan)
        assert lines[-1].endswith("-> end of disk")
