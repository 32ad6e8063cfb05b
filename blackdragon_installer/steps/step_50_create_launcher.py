from __future__ import annotations

import logging

from ..errors import ArtifactWriteError
from ..lib.files import write_text_file
from ..lib.templates import LauncherSpec, render_launcher_script
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class CreateLauncherStep:
    step_id = "50_create_launcher"

    def run(self, ctx: InstallContext) -> None:
        cfg = ctx.config
        logger.info("Creating launcher script...")

        script = render_launcher_script(
            LauncherSpec(
                prefix=cfg.prefix.root,
                arch=cfg.prefix.arch,
                app_dir=cfg.app_dir,
                exe=cfg.app_exe,
                support_files=cfg.support_files,
                env=cfg.launcher_env,
            )
        )

        try:
            write_text_file(cfg.launcher_path, script, mode=0o755, dry_run=ctx.dry_run)
        except OSError as e:
            raise ArtifactWriteError(f"Failed to write launcher {cfg.launcher_path}: {e}") from e

        ctx.decisions["launcher_path"] = str(cfg.launcher_path)
