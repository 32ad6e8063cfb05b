from __future__ import annotations

import logging

from ..errors import InstallerRunError
from ..lib.command import CommandError
from ..lib.dialog import zenity_info
from ..lib.wait import wait_for_file
from ..lib.wine import wine_run
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


def download_prompt(url: str, downloads_dir: str, filename: str) -> str:
    return (
        f"Please download Black Dragon Viewer from:\n{url}\n\n"
        f"Save it to {downloads_dir} and name it '{filename}'"
    )


class InstallApplicationStep:
    step_id = "40_install_application"

    def run(self, ctx: InstallContext) -> None:
        cfg = ctx.config
        installer = cfg.installer_path
        logger.info("Downloading Black Dragon Viewer...")

        if not ctx.dry_run:
            cfg.downloads_dir.mkdir(parents=True, exist_ok=True)

        zenity_info(
            download_prompt(cfg.download_url, str(cfg.downloads_dir), cfg.installer_filename),
            dry_run=ctx.dry_run,
        )

        if ctx.dry_run:
            logger.info("Would wait for %s", installer)
        else:
            wait_for_file(
                installer,
                interval=cfg.poll_interval,
                timeout=cfg.download_timeout,
                cancel=ctx.cancel,
            )

        logger.info("Installing Black Dragon Viewer...")
        try:
            wine_run(cfg.prefix, str(installer), dry_run=ctx.dry_run)
        except CommandError as e:
            raise InstallerRunError("Failed to install Black Dragon Viewer.") from e

        ctx.decisions["installer"] = str(installer)
