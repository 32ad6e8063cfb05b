from __future__ import annotations

import logging

from ..errors import DependencyInstallError
from ..lib.command import CommandError
from ..lib.pkg import missing_packages, pacman_install
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class InstallDependenciesStep:
    step_id = "10_install_dependencies"

    def run(self, ctx: InstallContext) -> None:
        cfg = ctx.config
        logger.info("Installing required packages...")

        missing = missing_packages(cfg.packages, dry_run=ctx.dry_run)
        ctx.decisions["missing_packages"] = missing
        if not missing:
            logger.info("All required packages already installed")
            return

        logger.info("Installing missing packages: %s", " ".join(missing))
        try:
            pacman_install(missing, sudo=cfg.sudo, dry_run=ctx.dry_run)
        except CommandError as e:
            raise DependencyInstallError("Failed to install required packages.") from e
