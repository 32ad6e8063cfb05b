from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional, TextIO

DEFAULT_LOG_PATH = str(Path.home() / ".local/state/blackdragon-installer/installer.log")

RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"
NC = "\033[0m"


class ConsoleFormatter(logging.Formatter):
    """User-facing console lines: a colored marker, then the message.

    INFO  -> [BlackDragon Installer]
    WARNING -> [Warning]
    ERROR and above -> [Error]
    DEBUG -> [Debug] (uncolored)
    """

    def __init__(self, color: bool = True) -> None:
        super().__init__(fmt="%(message)s")
        self.color = color

    def marker(self, levelno: int) -> str:
        if levelno >= logging.ERROR:
            tag, color = "[Error]", RED
        elif levelno >= logging.WARNING:
            tag, color = "[Warning]", YELLOW
        elif levelno >= logging.INFO:
            tag, color = "[BlackDragon Installer]", GREEN
        else:
            return "[Debug]"
        return f"{color}{tag}{NC}" if self.color else tag

    def format(self, record: logging.LogRecord) -> str:
        # Tracebacks belong in the log file, not on the console.
        return f"{self.marker(record.levelno)} {record.getMessage()}"


def _stream_supports_color(stream: TextIO) -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    return hasattr(stream, "isatty") and stream.isatty()


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
    console_stream: Optional[TextIO] = None,
) -> str:
    """Configure logging.

    Everything is recorded to the log file at DEBUG; the console gets
    ``level`` and above through ConsoleFormatter.

    If the requested log path is not writable we fall back to a file in the
    working directory. Returns the actual file path being used.
    """

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_blackdragon_configured", False):
        return getattr(logger, "_blackdragon_log_path", log_path)

    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        chosen_path = log_path
    except OSError:
        fallback = str(Path.cwd() / "blackdragon-installer.log")
        file_handler = logging.FileHandler(fallback)
        chosen_path = fallback
    file_handler.setFormatter(fmt)
    file_handler.setLevel(logging.DEBUG)
    handlers.append(file_handler)

    if also_console:
        stream = console_stream or sys.stderr
        console = logging.StreamHandler(stream)
        console.setFormatter(ConsoleFormatter(color=_stream_supports_color(stream)))
        console.setLevel(level)
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_blackdragon_configured", True)
    setattr(logger, "_blackdragon_log_path", chosen_path)

    logging.getLogger(__name__).debug(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
