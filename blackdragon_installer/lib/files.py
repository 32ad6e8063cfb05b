from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def write_text_file(path: Path, content: str, *, mode: int | None = None, dry_run: bool = False) -> None:
    if dry_run:
        logger.info("Would write %s", path)
        return

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    if mode is not None:
        path.chmod(mode)
    logger.info("Wrote %s", path)
