"""Tests for the provisioning step command sequences."""

from dataclasses import replace

import pytest

from arch_installer.install_config import InstallConfig
from arch_installer.lib.command import Command, WriteFile
from arch_installer.main import build_steps
from arch_installer.planner import plan_partitions
from arch_installer.steps import (
    ConfigureSystemStep,
    CreateUserStep,
    FinalizeStep,
    FormatPartitionsStep,
    GenerateFstabStep,
    InstallBaseSystemStep,
    InstallBootloaderStep,
    InstallNetworkStep,
    MountPartitionsStep,
    PartitionDiskStep,
    SetRootPasswordStep,
)
from arch_installer.steps.step_50_configure_system import locale_charset


@pytest.fixture
def sda():
    cfg = InstallConfig().validate()
    return cfg, plan_partitions(cfg)


def argvs(links):
    return [list(link.argv) for link in links if isinstance(link, Command)]


def test_step_order(sda):
    cfg, plan = sda
    steps = build_steps(cfg, plan)

    assert [s.step_id for s in steps] == [
        "10_partition_disk",
        "20_format_partitions",
        "30_mount_partitions",
        "40_install_base",
        "45_generate_fstab",
        "50_configure_system",
        "60_install_bootloader",
        "70_install_network",
        "80_set_root_password",
        "85_create_user",
        "90_finalize",
    ]
    assert steps[9].label == "Creating user user"


def test_partition_disk(sda):
    cfg, plan = sda
    assert argvs(PartitionDiskStep().links(cfg, plan)) == [
        ["parted", "-s", "/dev/sda", "mklabel", "gpt"],
        ["parted", "-s", "/dev/sda", "mkpart", "primary", "fat32", "1MiB", "512MiB"],
        ["parted", "-s", "/dev/sda", "set", "1", "esp", "on"],
        ["parted", "-s", "/dev/sda", "mkpart", "primary", "linux-swap", "512MiB", "2560MiB"],
        ["parted", "-s", "/dev/sda", "mkpart", "primary", "ext4", "2560MiB", "20992MiB"],
        ["parted", "-s", "/dev/sda", "mkpart", "primary", "ext4", "20992MiB", "100%"],
    ]


def test_format_partitions(sda):
    cfg, plan = sda
    assert argvs(FormatPartitionsStep().links(cfg, plan)) == [
        ["mkfs.fat", "-F32", "/dev/sda1"],
        ["mkswap", "/dev/sda2"],
        ["mkfs.ext4", "-F", "/dev/sda3"],
        ["mkfs.ext4", "-F", "/dev/sda4"],
    ]


def test_format_partitions_nvme(sda):
    cfg, _ = sda
    cfg = replace(cfg, device="/dev/nvme0n1")
    links = FormatPartitionsStep().links(cfg, plan_partitions(cfg))
    assert argvs(links)[0] == ["mkfs.fat", "-F32", "/dev/nvme0n1p1"]


def test_mount_partitions(sda):
    cfg, plan = sda
    assert argvs(MountPartitionsStep().links(cfg, plan)) == [
        ["mount", "/dev/sda3", "/mnt"],
        ["mkdir", "-p", "/mnt/boot"],
        ["mount", "/dev/sda1", "/mnt/boot"],
        ["swapon", "/dev/sda2"],
        ["mkdir", "-p", "/mnt/home"],
        ["mount", "/dev/sda4", "/mnt/home"],
    ]


def test_install_base_and_fstab(sda):
    cfg, plan = sda
    assert argvs(InstallBaseSystemStep().links(cfg, plan)) == [
        ["pacstrap", "/mnt", "base", "linux", "linux-firmware"]
    ]

    (fstab,) = GenerateFstabStep().links(cfg, plan)
    assert fstab.argv == ("genfstab", "-U", "/mnt")
    assert fstab.append_to == "/mnt/etc/fstab"


def test_configure_system(sda):
    cfg, plan = sda
    links = ConfigureSystemStep().links(cfg, plan)

    assert argvs(links) == [
        ["arch-chroot", "/mnt", "ln", "-sf", "/usr/share/zoneinfo/Europe/Moscow", "/etc/localtime"],
        ["arch-chroot", "/mnt", "hwclock", "--systohc"],
        ["arch-chroot", "/mnt", "locale-gen"],
    ]

    files = {link.path: link for link in links if isinstance(link, WriteFile)}
    assert files["/mnt/etc/locale.gen"].contents == "en_US.UTF-8 UTF-8\n"
    assert files["/mnt/etc/locale.gen"].append
    assert files["/mnt/etc/locale.conf"].contents == "LANG=en_US.UTF-8\n"
    assert files["/mnt/etc/vconsole.conf"].contents == "KEYMAP=us\n"
    assert files["/mnt/etc/hostname"].contents == "arch\n"
    assert files["/mnt/etc/hosts"].contents == (
        "127.0.0.1 localhost\n::1 localhost\n127.0.1.1 arch.localdomain arch\n"
    )


@pytest.mark.parametrize("locale,charset", [("en_US.UTF-8", "UTF-8"), ("de_DE.ISO-8859-1", "ISO-8859-1"), ("C", "UTF-8")])
def test_locale_charset(locale, charset):
    assert locale_charset(locale) == charset


def test_bootloader(sda):
    cfg, plan = sda
    links = InstallBootloaderStep().links(cfg, plan)

    assert argvs(links) == [["arch-chroot", "/mnt", "bootctl", "--path=/boot", "install"]]
    loader, entry = [link for link in links if isinstance(link, WriteFile)]
    assert loader.path == "/mnt/boot/loader/loader.conf"
    assert loader.contents == "default arch\ntimeout 3\nconsole-mode max\n"
    assert entry.path == "/mnt/boot/loader/entries/arch.conf"
    assert entry.contents.endswith("options root=/dev/sda3 rw\n")


def test_network(sda):
    cfg, plan = sda
    assert argvs(InstallNetworkStep().links(cfg, plan)) == [
        ["arch-chroot", "/mnt", "pacman", "-S", "networkmanager", "--noconfirm"],
        ["arch-chroot", "/mnt", "systemctl", "enable", "NetworkManager"],
    ]


def test_credentials_never_in_argv(sda):
    cfg, plan = sda
    cfg = replace(cfg, root_password="r00t-secret", user_password="u-secret")

    root_links = SetRootPasswordStep().links(cfg, plan)
    user_links = CreateUserStep().links(cfg, plan)

    for argv in argvs(root_links + user_links):
        assert not any("secret" in a for a in argv)
    assert root_links[0].input_text == "root:r00t-secret\n"
    assert user_links[1].input_text == "user:u-secret\n"


def test_create_user(sda):
    cfg, plan = sda
    links = CreateUserStep().links(cfg, plan)

    assert argvs(links)[0] == ["arch-chroot", "/mnt", "useradd", "-m", "-G", "wheel", "-s", "/bin/bash", "user"]
    sudoers = links[2]
    assert sudoers.path == "/mnt/etc/sudoers"
    assert sudoers.append
    assert sudoers.contents == "user ALL=(ALL) ALL\n"


def test_finalize(sda):
    cfg, plan = sda
    assert argvs(FinalizeStep().links(cfg, plan)) == [["umount", "-R", "/mnt"], ["swapoff", "-a"]]


def test_custom_mount_point(sda):
    cfg, _ = sda
    cfg = replace(cfg, mount_point="/target")
    plan = plan_partitions(cfg)

    assert argvs(FinalizeStep().links(cfg, plan))[0] == ["umount", "-R", "/target"]
    assert GenerateFstabStep().links(cfg, plan)[0].append_to == "/target/etc/fstab"
