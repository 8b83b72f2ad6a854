from .step_10_partition_disk import PartitionDiskStep
from .step_20_format_partitions import FormatPartitionsStep
from .step_30_mount_partitions import MountPartitionsStep
from .step_40_install_base import InstallBaseSystemStep
from .step_45_generate_fstab import GenerateFstabStep
from .step_50_configure_system import ConfigureSystemStep
from .step_60_install_bootloader import InstallBootloaderStep
from .step_70_install_network import InstallNetworkStep
from .step_80_set_root_password import SetRootPasswordStep
from .step_85_create_user import CreateUserStep
from .step_90_finalize import FinalizeStep

__all__ = [
    "PartitionDiskStep",
    "FormatPartitionsStep",
    "MountPartitionsStep",
    "InstallBaseSystemStep",
    "GenerateFstabStep",
    "ConfigureSystemStep",
    "InstallBootloaderStep",
    "InstallNetworkStep",
    "SetRootPasswordStep",
    "CreateUserStep",
    "FinalizeStep",
]
