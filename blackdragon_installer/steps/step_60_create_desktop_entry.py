from __future__ import annotations

import logging
from pathlib import Path

from ..errors import ArtifactWriteError
from ..lib.files import write_text_file
from ..lib.templates import DesktopEntrySpec, render_desktop_entry
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class CreateDesktopEntryStep:
    step_id = "60_create_desktop_entry"

    def run(self, ctx: InstallContext) -> None:
        cfg = ctx.config
        logger.info("Creating desktop entry...")

        # Exec must point at the launcher this run wrote.
        launcher = Path(ctx.decisions.get("launcher_path") or cfg.launcher_path)

        entry = render_desktop_entry(
            DesktopEntrySpec(
                name=cfg.app_name,
                comment=cfg.app_comment,
                exec_path=launcher,
                icon=cfg.icon_path,
                categories=cfg.categories,
            )
        )

        try:
            write_text_file(cfg.desktop_entry_path, entry, dry_run=ctx.dry_run)
        except OSError as e:
            raise ArtifactWriteError(f"Failed to write desktop entry {cfg.desktop_entry_path}: {e}") from e

        ctx.decisions["desktop_entry_path"] = str(cfg.desktop_entry_path)
