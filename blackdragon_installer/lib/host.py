from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def is_supported_platform(release_file: Path) -> bool:
    # Arch Linux ships /etc/arch-release; derivatives may not.
    return release_file.is_file()


def is_root() -> bool:
    return os.geteuid() == 0


def dir_on_path(directory: Path, path_env: str | None = None) -> bool:
    if path_env is None:
        path_env = os.environ.get("PATH", "")
    target = os.path.normpath(str(directory))
    return any(os.path.normpath(entry) == target for entry in path_env.split(os.pathsep) if entry)


def path_export_line(directory: Path, home: Path) -> str:
    try:
        rel = directory.relative_to(home)
        shown = f"$HOME/{rel.as_posix()}"
    except ValueError:
        shown = str(directory)
    return f'export PATH="{shown}:$PATH"'


def ensure_dir_on_path(
    directory: Path,
    *,
    home: Path,
    profile: Path,
    path_env: str | None = None,
    dry_run: bool = False,
) -> bool:
    """Append a PATH export to the shell profile when ``directory`` is missing from PATH.

    Returns True when a line was (or, in dry-run, would be) appended. A profile
    that cannot be written is logged and otherwise ignored.
    """

    if dir_on_path(directory, path_env):
        return False

    line = path_export_line(directory, home)
    if dry_run:
        logger.info("Would append %r to %s", line, profile)
        return True

    try:
        # Bytes, not text: profiles are not guaranteed to be UTF-8.
        existing = profile.read_bytes() if profile.exists() else b""
        with profile.open("a", encoding="utf-8") as fh:
            if existing and not existing.endswith(b"\n"):
                fh.write("\n")
            fh.write(line + "\n")
    except OSError as e:
        logger.warning("Could not update %s: %s", profile, e)
        return False

    logger.warning(
        "Added %s to PATH in %s. Please restart your terminal after installation.",
        directory,
        profile,
    )
    return True
