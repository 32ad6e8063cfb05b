from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import Callable, Optional

from ..errors import DownloadWaitError

logger = logging.getLogger(__name__)


def wait_for_file(
    path: Path,
    *,
    interval: float = 1.0,
    timeout: Optional[float] = None,
    cancel: Optional[threading.Event] = None,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> Path:
    """Block until ``path`` is a regular file.

    With the defaults this waits forever. ``timeout`` bounds the wait and
    ``cancel`` aborts it; both raise DownloadWaitError.
    """

    logger.info("Waiting for %s", path)
    deadline = None if timeout is None else clock() + timeout
    polls = 0

    while not path.is_file():
        if cancel is not None and cancel.is_set():
            raise DownloadWaitError(f"Cancelled while waiting for {path}")
        if deadline is not None and clock() >= deadline:
            raise DownloadWaitError(f"Timed out after {timeout:g}s waiting for {path}")
        polls += 1
        if polls % 60 == 0:
            logger.debug("Still waiting for %s (%d checks)", path, polls)
        sleep(interval)

    logger.info("Found %s", path)
    return path
