from __future__ import annotations


class InstallerError(Exception):
    """Base for every failure the installer reports and exits 1 on."""


class UnsupportedPlatform(InstallerError):
    pass


class PrivilegeError(InstallerError):
    pass


class ConfigError(InstallerError):
    pass


class DependencyInstallError(InstallerError):
    pass


class PrefixInitError(InstallerError):
    pass


class RedistributableError(InstallerError):
    def __init__(self, package: str, message: str | None = None) -> None:
        self.package = package
        super().__init__(message or f"Failed to install redistributable {package}.")


class DownloadWaitError(InstallerError):
    pass


class InstallerRunError(InstallerError):
    pass


class ArtifactWriteError(InstallerError):
    pass
