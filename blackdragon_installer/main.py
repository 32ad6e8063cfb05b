from __future__ import annotations

import argparse
import logging
import threading
from typing import Optional

from .config import InstallConfig, load_config
from .errors import InstallerError, PrivilegeError, UnsupportedPlatform
from .lib.host import ensure_dir_on_path, is_root, is_supported_platform
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import InstallContext, PipelineResult, run_pipeline
from .steps import (
    CreateDesktopEntryStep,
    CreateLauncherStep,
    InstallApplicationStep,
    InstallDependenciesStep,
    InstallRedistributablesStep,
    SetupPrefixStep,
)

logger = logging.getLogger(__name__)


def build_steps():
    return [
        InstallDependenciesStep(),
        SetupPrefixStep(),
        InstallRedistributablesStep(),
        InstallApplicationStep(),
        CreateLauncherStep(),
        CreateDesktopEntryStep(),
    ]


def check_preconditions(cfg: InstallConfig) -> None:
    if not is_supported_platform(cfg.release_file):
        raise UnsupportedPlatform("This script is designed for Arch Linux only.")
    if is_root():
        raise PrivilegeError("Please run this script as a normal user, not as root.")


def run(cfg: InstallConfig, *, cancel: Optional[threading.Event] = None) -> PipelineResult:
    """Check preconditions, fix up PATH, then run every step fail-fast.

    Precondition failures raise; step failures are returned in the result.
    """

    logger.info("Starting Black Dragon Viewer installation...")
    check_preconditions(cfg)

    ensure_dir_on_path(cfg.bin_dir, home=cfg.home, profile=cfg.shell_profile, dry_run=cfg.dry_run)

    ctx = InstallContext(config=cfg, cancel=cancel or threading.Event())
    result = run_pipeline(ctx, build_steps())
    logger.debug("Decisions: %s", ctx.decisions)
    return result


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="blackdragon-installer",
        description="Install Black Dragon Viewer under Wine on Arch Linux.",
    )
    p.add_argument("--config", default=None, help="YAML file merged over the packaged defaults")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to installer log")
    p.add_argument("--dry-run", action="store_true", help="Log commands and writes without executing them")
    p.add_argument(
        "--download-timeout",
        type=float,
        default=None,
        help="Give up waiting for the downloaded installer after this many seconds",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Show debug output on the console")

    args = p.parse_args(argv)

    configure_logging(log_path=args.log, level=logging.DEBUG if args.verbose else logging.INFO)

    overrides = {}
    if args.download_timeout is not None:
        overrides["download"] = {"timeout": args.download_timeout}

    try:
        cfg = load_config(args.config, overrides=overrides, dry_run=args.dry_run)
        result = run(cfg)
    except InstallerError as e:
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        logger.error("Installation interrupted.")
        return 130

    if not result.ok:
        logger.error("%s", result.error)
        return 1

    logger.info("Installation completed successfully!")
    logger.info(
        "You can now launch Black Dragon Viewer from your application menu or by running '%s'",
        cfg.launcher_path.name,
    )
    logger.warning("Please restart your desktop environment or computer for the changes to take effect.")
    return 0
