"""
Pytest configuration and shared fixtures for the Black Dragon installer tests.
"""

import subprocess
from pathlib import Path

import pytest

from blackdragon_installer.config import load_config
from blackdragon_installer.lib import command
from blackdragon_installer.pipeline import InstallContext


class FakeRunner:
    """Stands in for subprocess.run and records every call."""

    def __init__(self):
        self.calls = []
        self.returncodes = {}
        self.side_effects = {}

    def fail(self, *argv_prefix, returncode=1):
        self.returncodes[tuple(argv_prefix)] = returncode

    def on(self, *argv_prefix, effect):
        self.side_effects[tuple(argv_prefix)] = effect

    def _lookup(self, table, argv):
        for prefix, value in table.items():
            if tuple(argv[: len(prefix)]) == prefix:
                return value
        return None

    def __call__(self, argv, **kwargs):
        argv = list(argv)
        self.calls.append({"argv": argv, "env": kwargs.get("env") or {}, "cwd": kwargs.get("cwd")})
        effect = self._lookup(self.side_effects, argv)
        if effect is not None:
            effect(argv, kwargs)
        rc = self._lookup(self.returncodes, argv) or 0
        return subprocess.CompletedProcess(argv, rc, stdout="", stderr="boom" if rc else "")

    def argvs(self, program=None):
        return [c["argv"] for c in self.calls if program is None or c["argv"][0] == program or program in c["argv"]]


@pytest.fixture
def fake_run(monkeypatch):
    runner = FakeRunner()
    monkeypatch.setattr(command.subprocess, "run", runner)
    return runner


@pytest.fixture
def home(tmp_path):
    h = tmp_path / "home"
    h.mkdir()
    return h


@pytest.fixture
def release_file(tmp_path):
    p = tmp_path / "arch-release"
    p.write_text("", encoding="utf-8")
    return p


@pytest.fixture
def cfg(home, release_file):
    return load_config(home=home, overrides={"platform": {"release_file": str(release_file)}})


@pytest.fixture
def ctx(cfg):
    return InstallContext(config=cfg)


@pytest.fixture
def installer_file(cfg):
    """Pretend the user already saved the installer in ~/Downloads."""
    cfg.downloads_dir.mkdir(parents=True, exist_ok=True)
    cfg.installer_path.write_bytes(b"MZ")
    return cfg.installer_path


def make_prefix(argv, kwargs):
    """Side effect for wineboot: create a minimal prefix."""
    root = Path(kwargs["env"]["WINEPREFIX"])
    (root / "drive_c").mkdir(parents=True, exist_ok=True)
    (root / "system.reg").write_text("WINE REGISTRY\n", encoding="utf-8")
