"""
FILE: tasktracker/config.py
PURPOSE: Settings loaded from environment variables
EXPORTS:
  - Settings (frozen dataclass)
  - get_settings() -> Settings
DEPENDENCIES:
  - os, pathlib, dataclasses (stdlib)
NOTES:
  - All variables use the TASKTRACKER_ prefix
  - Read at call time so tests and subprocesses can point the app at a temp dir
  - Unset or blank variables fall back to defaults
"""

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TASKTRACKER"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    db_path: Path
    log_file: Path
    log_level: str
    auto_list: bool

    @staticmethod
    def from_env() -> "Settings":
        data_dir = _env_path(_k("DATA_DIR"), Path.home() / ".tasktracker")
        return Settings(
            data_dir=data_dir,
            db_path=_env_path(_k("DB_PATH"), data_dir / "tasktracker.db"),
            log_file=_env_path(_k("LOG_FILE"), data_dir / "tasktracker.log"),
            log_level=_env(_k("LOG_LEVEL"), "WARNING").upper(),
            auto_list=_env_bool(_k("AUTO_LIST"), True),
        )


def get_settings() -> Settings:
    return Settings.from_env()
