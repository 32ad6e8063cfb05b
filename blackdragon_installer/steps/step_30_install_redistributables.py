from __future__ import annotations

import logging

from ..errors import RedistributableError
from ..lib.command import CommandError
from ..lib.wine import winetricks
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class InstallRedistributablesStep:
    step_id = "30_install_redistributables"

    def run(self, ctx: InstallContext) -> None:
        cfg = ctx.config
        logger.info("Installing Visual C++ Redistributables...")

        installed = ctx.decisions.setdefault("redistributables", [])
        for verb in cfg.redistributables:
            try:
                winetricks(cfg.prefix, verb, dry_run=ctx.dry_run)
            except CommandError as e:
                raise RedistributableError(verb, f"Failed to install {verb}.") from e
            installed.append(verb)
