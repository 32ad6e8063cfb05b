from __future__ import annotations

import logging

from ..errors import PrefixInitError
from ..lib.command import CommandError
from ..lib.wine import reset_prefix, wineboot_init
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class SetupPrefixStep:
    step_id = "20_setup_prefix"

    def run(self, ctx: InstallContext) -> None:
        prefix = ctx.config.prefix
        logger.info("Setting up Wine prefix...")

        # A leftover prefix is always stale; never reuse it.
        try:
            ctx.decisions["prefix_removed"] = reset_prefix(prefix, dry_run=ctx.dry_run)
        except OSError as e:
            raise PrefixInitError(f"Failed to remove existing Wine prefix {prefix.root}: {e}") from e

        try:
            wineboot_init(prefix, dry_run=ctx.dry_run)
        except CommandError as e:
            raise PrefixInitError("Failed to initialize Wine prefix.") from e

        ctx.decisions["prefix"] = str(prefix.root)
