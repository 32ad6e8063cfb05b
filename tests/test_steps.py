"""
Unit tests for the individual installer steps.
"""

import os
import shutil
import stat
import subprocess

import pytest

from blackdragon_installer.config import load_config
from blackdragon_installer.errors import (
    DependencyInstallError,
    DownloadWaitError,
    InstallerRunError,
    PrefixInitError,
    RedistributableError,
)
from blackdragon_installer.pipeline import InstallContext
from blackdragon_installer.steps import (
    CreateDesktopEntryStep,
    CreateLauncherStep,
    InstallApplicationStep,
    InstallDependenciesStep,
    InstallRedistributablesStep,
    SetupPrefixStep,
)

from .conftest import make_prefix


class TestInstallDependenciesStep:
    """Test the pacman dependency step."""

    def test_installs_only_missing_packages(self, ctx, fake_run):
        fake_run.fail("pacman", "-Qi", "wine-mono")
        fake_run.fail("pacman", "-Qi", "zenity")

        InstallDependenciesStep().run(ctx)

        installs = [a for a in fake_run.argvs() if "-S" in a]
        assert installs == [["sudo", "pacman", "-S", "--needed", "--noconfirm", "wine-mono", "zenity"]]
        assert ctx.decisions["missing_packages"] == ["wine-mono", "zenity"]

    def test_queries_every_required_package(self, ctx, fake_run):
        InstallDependenciesStep().run(ctx)

        queried = [a[2] for a in fake_run.argvs() if a[:2] == ["pacman", "-Qi"]]
        assert queried == ["wine", "wine-mono", "wine-gecko", "winetricks", "zenity", "wget"]

    def test_nothing_missing_means_no_install_call(self, ctx, fake_run):
        InstallDependenciesStep().run(ctx)

        assert not [a for a in fake_run.argvs() if "-S" in a]
        assert ctx.decisions["missing_packages"] == []

    def test_duplicate_packages_are_installed_once(self, home, release_file, fake_run):
        cfg = load_config(
            home=home,
            overrides={"platform": {"release_file": str(release_file)}, "packages": ["wine", "wget", "wine"]},
        )
        fake_run.fail("pacman", "-Qi", "wine")

        InstallDependenciesStep().run(InstallContext(config=cfg))

        installs = [a for a in fake_run.argvs() if "-S" in a]
        assert installs == [["sudo", "pacman", "-S", "--needed", "--noconfirm", "wine"]]

    def test_package_manager_failure(self, ctx, fake_run):
        fake_run.fail("pacman", "-Qi", "wget")
        fake_run.fail("sudo", "pacman", "-S")

        with pytest.raises(DependencyInstallError):
            InstallDependenciesStep().run(ctx)


class TestSetupPrefixStep:
    """Test prefix reset and wineboot."""

    def test_bootstraps_with_prefix_env(self, ctx, fake_run):
        fake_run.on("wineboot", effect=make_prefix)

        SetupPrefixStep().run(ctx)

        [call] = fake_run.calls
        assert call["argv"] == ["wineboot", "-i"]
        assert call["env"]["WINEPREFIX"] == str(ctx.config.prefix.root)
        assert call["env"]["WINEARCH"] == "win64"

    def test_existing_prefix_is_wiped(self, ctx, fake_run):
        root = ctx.config.prefix.root
        (root / "drive_c").mkdir(parents=True)
        stale = root / "drive_c" / "stale.txt"
        stale.write_text("old", encoding="utf-8")
        fake_run.on("wineboot", effect=make_prefix)

        SetupPrefixStep().run(ctx)

        assert not stale.exists()
        assert (root / "system.reg").exists()
        assert ctx.decisions["prefix_removed"] is True

    def test_running_twice_starts_fresh_each_time(self, cfg, fake_run):
        fake_run.on("wineboot", effect=make_prefix)
        root = cfg.prefix.root

        SetupPrefixStep().run(InstallContext(config=cfg))
        (root / "leftover.txt").write_text("x", encoding="utf-8")
        SetupPrefixStep().run(InstallContext(config=cfg))

        assert sorted(p.name for p in root.iterdir()) == ["drive_c", "system.reg"]

    def test_wineboot_failure(self, ctx, fake_run):
        fake_run.fail("wineboot")

        with pytest.raises(PrefixInitError):
            SetupPrefixStep().run(ctx)


class TestInstallRedistributablesStep:
    """Test winetricks redistributable installs."""

    def test_installs_in_order(self, ctx, fake_run):
        InstallRedistributablesStep().run(ctx)

        assert fake_run.argvs() == [["winetricks", "-q", "vcrun2013"], ["winetricks", "-q", "vcrun2019"]]
        assert all(c["env"]["WINEPREFIX"] == str(ctx.config.prefix.root) for c in fake_run.calls)

    def test_second_failure_names_package(self, ctx, fake_run):
        fake_run.fail("winetricks", "-q", "vcrun2019")

        with pytest.raises(RedistributableError) as exc:
            InstallRedistributablesStep().run(ctx)

        assert exc.value.package == "vcrun2019"
        assert "vcrun2019" in str(exc.value)
        assert ctx.decisions["redistributables"] == ["vcrun2013"]

    def test_first_failure_stops_before_second(self, ctx, fake_run):
        fake_run.fail("winetricks", "-q", "vcrun2013")

        with pytest.raises(RedistributableError) as exc:
            InstallRedistributablesStep().run(ctx)

        assert exc.value.package == "vcrun2013"
        assert fake_run.argvs() == [["winetricks", "-q", "vcrun2013"]]


class TestInstallApplicationStep:
    """Test the manual download prompt and installer run."""

    def test_prompts_then_runs_installer(self, ctx, fake_run, installer_file):
        InstallApplicationStep().run(ctx)

        zenity, wine = fake_run.argvs()
        assert zenity[:2] == ["zenity", "--info"]
        assert any(ctx.config.installer_filename in a for a in zenity)
        assert any("https://niranv-sl.blogspot.com/" in a for a in zenity)
        assert wine == ["wine", str(installer_file)]
        assert fake_run.calls[1]["env"]["WINEPREFIX"] == str(ctx.config.prefix.root)

    def test_installer_failure(self, ctx, fake_run, installer_file):
        fake_run.fail("wine")

        with pytest.raises(InstallerRunError):
            InstallApplicationStep().run(ctx)

    def test_dismissed_dialog_is_not_a_failure(self, ctx, fake_run, installer_file):
        fake_run.fail("zenity")

        InstallApplicationStep().run(ctx)

        assert fake_run.argvs()[-1][0] == "wine"

    def test_wait_timeout_skips_installer(self, home, release_file, fake_run):
        cfg = load_config(
            home=home,
            overrides={"platform": {"release_file": str(release_file)}, "download": {"timeout": 0}},
        )

        with pytest.raises(DownloadWaitError):
            InstallApplicationStep().run(InstallContext(config=cfg))

        assert cfg.downloads_dir.is_dir()
        assert [a[0] for a in fake_run.argvs()] == ["zenity"]

    def test_cancelled_wait(self, ctx, fake_run):
        ctx.cancel.set()

        with pytest.raises(DownloadWaitError):
            InstallApplicationStep().run(ctx)

        assert "wine" not in [a[0] for a in fake_run.argvs()]


class TestCreateLauncherStep:
    """Test launcher generation."""

    def test_writes_executable_without_prefix(self, ctx):
        assert not ctx.config.prefix.root.exists()

        CreateLauncherStep().run(ctx)

        path = ctx.config.launcher_path
        assert path.is_file()
        assert os.stat(path).st_mode & stat.S_IXUSR
        assert f"export WINEPREFIX={ctx.config.prefix.root}" in path.read_text(encoding="utf-8")
        assert ctx.decisions["launcher_path"] == str(path)

    def test_dry_run_writes_nothing(self, home, release_file):
        cfg = load_config(home=home, overrides={"platform": {"release_file": str(release_file)}}, dry_run=True)

        CreateLauncherStep().run(InstallContext(config=cfg))

        assert not cfg.launcher_path.exists()


@pytest.mark.skipif(shutil.which("bash") is None, reason="bash not available")
class TestGeneratedLauncher:
    """Run the written launcher with stub zenity and wine."""

    @pytest.fixture
    def stub_bin(self, tmp_path):
        bin_dir = tmp_path / "stub-bin"
        bin_dir.mkdir()
        log = tmp_path / "calls.log"
        for name in ("zenity", "wine"):
            stub = bin_dir / name
            stub.write_text(f'#!/bin/sh\necho "{name.upper()} $PWD $*" >> "{log}"\n', encoding="utf-8")
            stub.chmod(0o755)
        return bin_dir, log

    def _run(self, ctx, stub_bin):
        bin_dir, _ = stub_bin
        CreateLauncherStep().run(ctx)
        env = dict(os.environ, PATH=f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
        return subprocess.run(["bash", str(ctx.config.launcher_path)], env=env, capture_output=True, text=True)

    def test_fails_when_support_files_missing(self, ctx, stub_bin):
        _, log = stub_bin

        proc = self._run(ctx, stub_bin)

        assert proc.returncode == 1
        calls = log.read_text(encoding="utf-8").splitlines()
        assert len(calls) == 1
        assert calls[0].startswith("ZENITY ")
        assert "--error" in calls[0]

    def test_runs_viewer_when_support_files_present(self, ctx, stub_bin):
        _, log = stub_bin
        cfg = ctx.config
        for rel in cfg.support_files:
            dll = cfg.prefix.path(rel)
            dll.parent.mkdir(parents=True, exist_ok=True)
            dll.write_bytes(b"MZ")
        cfg.app_dir.mkdir(parents=True, exist_ok=True)

        proc = self._run(ctx, stub_bin)

        assert proc.returncode == 0
        assert log.read_text(encoding="utf-8").splitlines() == [f"WINE {cfg.app_dir} {cfg.app_exe}"]


class TestCreateDesktopEntryStep:
    """Test desktop entry generation."""

    def test_exec_matches_launcher_written_this_run(self, ctx):
        CreateLauncherStep().run(ctx)
        CreateDesktopEntryStep().run(ctx)

        text = ctx.config.desktop_entry_path.read_text(encoding="utf-8")
        assert f"Exec={ctx.decisions['launcher_path']}\n" in text
        assert f"Icon={ctx.config.icon_path}\n" in text
        assert "Terminal=false\n" in text
