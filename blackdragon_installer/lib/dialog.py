from __future__ import annotations

from .command import CmdResult, run_cmd


def zenity_info(text: str, *, width: int = 400, dry_run: bool = False) -> CmdResult:
    # Blocks until the user dismisses it; closing the dialog is not a failure.
    return run_cmd(["zenity", "--info", f"--text={text}", f"--width={width}"], check=False, dry_run=dry_run)
