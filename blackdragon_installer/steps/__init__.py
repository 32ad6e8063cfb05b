from .step_10_install_dependencies import InstallDependenciesStep
from .step_20_setup_prefix import SetupPrefixStep
from .step_30_install_redistributables import InstallRedistributablesStep
from .step_40_install_application import InstallApplicationStep
from .step_50_create_launcher import CreateLauncherStep
from .step_60_create_desktop_entry import CreateDesktopEntryStep

__all__ = [
    "InstallDependenciesStep",
    "SetupPrefixStep",
    "InstallRedistributablesStep",
    "InstallApplicationStep",
    "CreateLauncherStep",
    "CreateDesktopEntryStep",
]
