from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .errors import ConfigError
from .lib.wine import WinePrefix

DEFAULTS_PATH = Path(__file__).resolve().parent / "manifests" / "defaults.yaml"


def _section(raw: Mapping[str, Any], key: str) -> Dict[str, Any]:
    return dict(raw.get(key) or {})


@dataclass(frozen=True)
class InstallConfig:
    """Merged installer settings with paths resolved against ``home``."""

    raw: Dict[str, Any]
    home: Path
    dry_run: bool = False

    def _path(self, value: Any) -> Path:
        s = str(value)
        if s == "~":
            return self.home
        if s.startswith("~/"):
            return self.home / s[2:]
        return Path(s)

    @property
    def release_file(self) -> Path:
        return self._path(_section(self.raw, "platform").get("release_file") or "/etc/arch-release")

    @property
    def packages(self) -> List[str]:
        return [str(p) for p in self.raw.get("packages") or []]

    @property
    def sudo(self) -> List[str]:
        return [str(a) for a in self.raw.get("sudo") or []]

    @property
    def prefix(self) -> WinePrefix:
        p = _section(self.raw, "prefix")
        return WinePrefix(root=self._path(p.get("path") or "~/.wine_blackdragon"), arch=str(p.get("arch") or "win64"))

    @property
    def redistributables(self) -> List[str]:
        return [str(v) for v in self.raw.get("redistributables") or []]

    @property
    def download_url(self) -> str:
        return str(_section(self.raw, "download").get("url") or "")

    @property
    def downloads_dir(self) -> Path:
        return self._path(_section(self.raw, "download").get("dir") or "~/Downloads")

    @property
    def installer_filename(self) -> str:
        return str(_section(self.raw, "download")["filename"])

    @property
    def installer_path(self) -> Path:
        return self.downloads_dir / self.installer_filename

    @property
    def poll_interval(self) -> float:
        interval = _section(self.raw, "download").get("poll_interval")
        return 1.0 if interval is None else float(interval)

    @property
    def download_timeout(self) -> Optional[float]:
        t = _section(self.raw, "download").get("timeout")
        return None if t is None else float(t)

    @property
    def app_name(self) -> str:
        return str(_section(self.raw, "application").get("name") or "Black Dragon Viewer")

    @property
    def app_comment(self) -> str:
        return str(_section(self.raw, "application").get("comment") or "")

    @property
    def categories(self) -> List[str]:
        return [str(c) for c in _section(self.raw, "application").get("categories") or []]

    @property
    def app_dir(self) -> Path:
        return self.prefix.path(str(_section(self.raw, "application")["dir"]))

    @property
    def app_exe(self) -> str:
        return str(_section(self.raw, "application")["exe"])

    @property
    def icon_path(self) -> Path:
        return self.app_dir / self.app_exe

    @property
    def support_files(self) -> List[str]:
        return [str(f) for f in _section(self.raw, "application").get("support_files") or []]

    @property
    def bin_dir(self) -> Path:
        return self._path(_section(self.raw, "launcher").get("bin_dir") or "~/.local/bin")

    @property
    def launcher_path(self) -> Path:
        return self.bin_dir / str(_section(self.raw, "launcher")["filename"])

    @property
    def launcher_env(self) -> Dict[str, str]:
        env = _section(self.raw, "launcher").get("env") or {}
        return {str(k): str(v) for k, v in env.items()}

    @property
    def applications_dir(self) -> Path:
        return self._path(_section(self.raw, "desktop").get("applications_dir") or "~/.local/share/applications")

    @property
    def desktop_entry_path(self) -> Path:
        return self.applications_dir / str(_section(self.raw, "desktop")["filename"])

    @property
    def shell_profile(self) -> Path:
        return self._path(self.raw.get("shell_profile") or "~/.bashrc")


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge mappings recursively; lists and scalars in ``override`` replace."""

    out = copy.deepcopy(dict(base))
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(out.get(key), Mapping):
            out[key] = deep_merge(out[key], value)
        else:
            out[key] = copy.deepcopy(value)
    return out


def load_yaml_mapping(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a mapping/dict: {path}")
    return data


def load_config(
    path: Optional[str] = None,
    *,
    home: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    dry_run: bool = False,
) -> InstallConfig:
    raw = load_yaml_mapping(DEFAULTS_PATH)
    if path:
        raw = deep_merge(raw, load_yaml_mapping(Path(path).expanduser()))
    if overrides:
        raw = deep_merge(raw, overrides)

    cfg = InstallConfig(raw=raw, home=home or Path.home(), dry_run=dry_run)
    _validate(cfg)
    return cfg


def _validate(cfg: InstallConfig) -> None:
    for key in ("download", "application", "launcher", "desktop"):
        if not isinstance(cfg.raw.get(key), dict):
            raise ConfigError(f"Config section '{key}' must be a mapping")
    try:
        # Touch every required key so a bad override fails before any step runs.
        _ = (cfg.installer_filename, cfg.app_dir, cfg.app_exe, cfg.launcher_path, cfg.desktop_entry_path)
        timeout = cfg.download_timeout
        interval = cfg.poll_interval
    except KeyError as e:
        raise ConfigError(f"Missing config key: {e.args[0]}") from e
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid config value: {e}") from e

    if interval <= 0:
        raise ConfigError("download.poll_interval must be positive")
    if timeout is not None and timeout < 0:
        raise ConfigError("download.timeout must be >= 0 or null")
    if not cfg.packages:
        raise ConfigError("packages must list at least one package")
