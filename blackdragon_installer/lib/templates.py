"""Pure renderers for the files the installer generates.

Nothing here touches the filesystem; steps write the returned text.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Sequence

MISSING_DLL_MESSAGE = (
    "Required Visual C++ DLLs not found. Please verify Visual C++ Redistributables installation."
)


@dataclass(frozen=True)
class LauncherSpec:
    prefix: Path
    arch: str
    app_dir: Path
    exe: str
    support_files: Sequence[str] = ()
    env: Mapping[str, str] = field(default_factory=dict)
    missing_message: str = MISSING_DLL_MESSAGE


@dataclass(frozen=True)
class DesktopEntrySpec:
    name: str
    comment: str
    exec_path: Path
    icon: Path
    categories: Sequence[str] = ("Game",)
    terminal: bool = False


def render_launcher_script(spec: LauncherSpec) -> str:
    q = shlex.quote
    lines = [
        "#!/bin/bash",
        "",
        f"export WINEPREFIX={q(str(spec.prefix))}",
        f"export WINEARCH={q(spec.arch)}",
    ]
    for key, value in spec.env.items():
        lines.append(f"export {key}={q(str(value))}")
    lines.append("")

    if spec.support_files:
        checks = [f'[ ! -f "$WINEPREFIX"/{q(rel)} ]' for rel in spec.support_files]
        lines.append("# Verify DLL existence")
        lines.append("if " + " || \\\n   ".join(checks) + "; then")
        lines.append(f"    zenity --error --text={q(spec.missing_message)}")
        lines.append("    exit 1")
        lines.append("fi")
        lines.append("")

    lines.append(f"cd {q(str(spec.app_dir))} || exit 1")
    lines.append(f"exec wine {q(spec.exe)}")
    return "\n".join(lines) + "\n"


# Characters that force an Exec argument to be quoted (freedesktop Desktop Entry spec).
_EXEC_RESERVED = set(" \t\n\"'\\><~|&;$*?#()`")


def desktop_exec_value(path: Path) -> str:
    """Encode a program path for Exec=, quoting only when it needs it."""

    arg = str(path).replace("%", "%%")
    if any(c in _EXEC_RESERVED for c in arg):
        for c in ("\\", "\"", "`", "$"):
            arg = arg.replace(c, "\\" + c)
        arg = f'"{arg}"'
    # Exec is a string value, so backslashes are escaped once more.
    return arg.replace("\\", "\\\\")


def render_desktop_entry(spec: DesktopEntrySpec) -> str:
    categories = "".join(f"{c};" for c in spec.categories)
    return (
        "[Desktop Entry]\n"
        f"Name={spec.name}\n"
        f"Comment={spec.comment}\n"
        f"Exec={desktop_exec_value(spec.exec_path)}\n"
        "Type=Application\n"
        f"Categories={categories}\n"
        f"Icon={spec.icon}\n"
        f"Terminal={'true' if spec.terminal else 'false'}\n"
    )
