########## ini_config.py

import os
from configparser import ConfigParser
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from winrepair.domain.errors import ConfigError
from winrepair.domain.models import RunContext

INI_DEFAULT_NAME = "WinRepair.ini"

DEFAULT_CANDIDATE_DIRS = r"D:\sources, E:\sources, C:\RepairSource"


@dataclass(frozen=True)
class AppSettings:
    log_dir: Path

    dism_path: str
    sfc_path: str

    # searched in this order; first directory holding an image wins
    media_candidate_dirs: tuple[Path, ...]
    image_extension: str
    image_index: int

    open_browser: bool

    flask_host: str
    flask_port: int
    flask_debug: bool

    def new_run_context(self, now: Optional[datetime] = None) -> RunContext:
        now = now or datetime.now()
        run_id = now.strftime("%Y%m%d_%H%M%S")
        return RunContext(
            run_id=run_id,
            generated_at=now.strftime("%Y-%m-%d %H:%M:%S"),
            log_path=self.log_dir / f"RepairLog_{run_id}.log",
            report_path=self.log_dir / f"RepairReport_{run_id}.txt",
        )


def _expand(raw: str) -> str:
    return os.path.expandvars(os.path.expanduser(raw.strip()))


class IniConfig:
    """
    Adapter around ConfigParser and filesystem resolution.
    Keeps INI handling out of the services.
    """

    def __init__(self, ini_path: Path):
        self._ini_path = ini_path
        self._cfg = ConfigParser()
        read_ok = self._cfg.read(str(ini_path), encoding="utf-8-sig")
        if not read_ok:
            raise FileNotFoundError(f"INI file not found or unreadable: {ini_path}")

    @property
    def ini_path(self) -> Path:
        return self._ini_path

    @staticmethod
    def from_env_or_default() -> "IniConfig":
        ini_raw = (os.getenv("APP_INI") or "").strip()
        # If APP_INI is not set, default to repo-root-relative ini location
        ini_path = Path(ini_raw) if ini_raw else (Path(__file__).resolve().parents[2] / INI_DEFAULT_NAME)
        return IniConfig(ini_path)

    def _cfg_path(self, section: str, key: str) -> Path:
        """
        Reads a filesystem path from INI and resolves it.
        Tries [paths] and [path] interchangeably for convenience.
        """
        sections_to_try = [section]
        if section == "paths":
            sections_to_try.append("path")
        if section == "path":
            sections_to_try.append("paths")

        for sec in sections_to_try:
            if not self._cfg.has_section(sec):
                continue
            raw = (self._cfg.get(sec, key, fallback="") or "").strip()
            if raw:
                return Path(_expand(raw)).resolve()

        raise ConfigError(f"Missing INI value for {key} in sections: {sections_to_try}")

    def load_settings(self) -> AppSettings:
        # Required paths
        log_dir = self._cfg_path("paths", "log_dir")

        # External tools; bare names are resolved through PATH by the OS
        dism_path = _expand(self._cfg.get("tools", "dism_path", fallback="dism.exe") or "") or "dism.exe"
        sfc_path = _expand(self._cfg.get("tools", "sfc_path", fallback="sfc.exe") or "") or "sfc.exe"

        # Install media search
        media_candidate_dirs = tuple(
            Path(_expand(d))
            for d in (self._cfg.get("media", "candidate_dirs", fallback=DEFAULT_CANDIDATE_DIRS) or "").split(",")
            if d.strip()
        )
        image_extension = (self._cfg.get("media", "image_extension", fallback=".wim") or "").strip().lower() or ".wim"
        if not image_extension.startswith("."):
            image_extension = "." + image_extension
        image_index = self._cfg.getint("media", "image_index", fallback=1)

        open_browser = self._cfg.getboolean("guidance", "open_browser", fallback=True)

        # Flask (report browser)
        flask_host = (self._cfg.get("flask", "host", fallback="127.0.0.1") or "").strip() or "127.0.0.1"
        flask_port = self._cfg.getint("flask", "port", fallback=5000)
        flask_debug = self._cfg.getboolean("flask", "debug", fallback=False)

        # Validate
        if not media_candidate_dirs:
            raise ConfigError("media.candidate_dirs must list at least one directory")
        if image_index < 1:
            raise ConfigError(f"media.image_index must be >= 1, got {image_index}")

        log_dir.mkdir(parents=True, exist_ok=True)

        return AppSettings(
            log_dir=log_dir,
            dism_path=dism_path,
            sfc_path=sfc_path,
            media_candidate_dirs=media_candidate_dirs,
            image_extension=image_extension,
            image_index=image_index,
            open_browser=open_browser,
            flask_host=flask_host,
            flask_port=flask_port,
            flask_debug=flask_debug,
        )
