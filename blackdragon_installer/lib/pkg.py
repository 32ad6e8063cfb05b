from __future__ import annotations

import logging
from typing import Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)


def pacman_is_installed(package: str, *, dry_run: bool = False) -> bool:
    """Return True if pacman reports the package as installed (pacman -Qi)."""
    r = run_cmd(["pacman", "-Qi", package], check=False, dry_run=dry_run)
    return r.returncode == 0


def missing_packages(packages: Sequence[str], *, dry_run: bool = False) -> list[str]:
    """Packages not currently installed, in input order, each listed once."""
    missing: list[str] = []
    for pkg in packages:
        if pkg in missing:
            continue
        if not pacman_is_installed(pkg, dry_run=dry_run):
            missing.append(pkg)
    return missing


def pacman_install(
    packages: Sequence[str],
    *,
    sudo: Sequence[str] = ("sudo",),
    dry_run: bool = False,
) -> None:
    """Batch install without confirmation; elevation only for this call."""
    if not packages:
        return
    run_cmd(
        [*sudo, "pacman", "-S", "--needed", "--noconfirm", *packages],
        capture=False,
        dry_run=dry_run,
    )
