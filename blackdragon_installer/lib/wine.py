from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WinePrefix:
    root: Path
    arch: str = "win64"

    def env(self) -> Dict[str, str]:
        return {"WINEPREFIX": str(self.root), "WINEARCH": self.arch}

    def path(self, rel: str) -> Path:
        return self.root / rel


def reset_prefix(prefix: WinePrefix, *, dry_run: bool = False) -> bool:
    """Delete an existing prefix. Returns True if something was removed."""
    if not prefix.root.exists():
        return False
    logger.warning("Existing Wine prefix found. Removing %s", prefix.root)
    if dry_run:
        logger.info("Would remove %s", prefix.root)
        return True
    if prefix.root.is_dir() and not prefix.root.is_symlink():
        shutil.rmtree(prefix.root)
    else:
        prefix.root.unlink()
    return True


def wineboot_init(prefix: WinePrefix, *, dry_run: bool = False) -> CmdResult:
    return run_cmd(["wineboot", "-i"], env=prefix.env(), dry_run=dry_run)


def winetricks(prefix: WinePrefix, verb: str, *, dry_run: bool = False) -> CmdResult:
    return run_cmd(["winetricks", "-q", verb], env=prefix.env(), capture=False, dry_run=dry_run)


def wine_run(prefix: WinePrefix, exe: str, *, dry_run: bool = False) -> CmdResult:
    return run_cmd(["wine", exe], env=prefix.env(), capture=False, dry_run=dry_run)
