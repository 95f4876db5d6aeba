from .step_10_check_privileges import CheckPrivilegesStep
from .step_20_probe_network import ProbeNetworkStep
from .step_30_tune_kernel import TuneKernelStep
from .step_40_install_runtime import InstallRuntimeStep
from .step_45_check_storage_driver import CheckStorageDriverStep
from .step_50_discover_addresses import DiscoverAddressesStep
from .step_60_install_admin_console import InstallAdminConsoleStep

__all__ = [
    "CheckPrivilegesStep",
    "ProbeNetworkStep",
    "TuneKernelStep",
    "InstallRuntimeStep",
    "CheckStorageDriverStep",
    "DiscoverAddressesStep",
    "InstallAdminConsoleStep",
]
