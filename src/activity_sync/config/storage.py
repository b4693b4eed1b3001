"""Where the ledger database and the HTTP cache live on disk."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import env_flag, optional_env

APP_DIR_NAME: Final[str] = "activity-sync"
DEFAULT_DB_FILENAME: Final[str] = "activity_ledger.db"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"

DATA_DIR_ENV: Final[str] = "ACTIVITY_SYNC_DATA_DIR"
DATABASE_URI_ENV: Final[str] = "DATABASE_URI"
DATABASE_ECHO_ENV: Final[str] = "DATABASE_ECHO"


def _platform_data_home() -> Path:
    if os.name == "nt":
        return Path(os.getenv("LOCALAPPDATA") or Path.home() / "AppData" / "Local")
    return Path(os.getenv("XDG_DATA_HOME") or Path.home() / ".local" / "share")


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Files kept below one data directory, created on first use."""

    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME
    http_cache_filename: str = HTTP_CACHE_FILENAME

    @property
    def root(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def _file(self, filename: str, *, ensure: bool) -> Path:
        if ensure:
            self.root.mkdir(parents=True, exist_ok=True)
        return self.root / filename

    def database_path(self, *, ensure: bool = True) -> Path:
        return self._file(self.database_filename, ensure=ensure)

    def http_cache_path(self, *, ensure: bool = True) -> Path:
        return self._file(self.http_cache_filename, ensure=ensure)

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str
    echo: bool = False


def get_storage_config() -> StorageConfig:
    override = optional_env(DATA_DIR_ENV)
    data_dir = Path(override) if override else _platform_data_home() / APP_DIR_NAME
    return StorageConfig(data_dir=data_dir)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """``DATABASE_URI`` wins; otherwise a SQLite file in the data directory."""

    uri = optional_env(DATABASE_URI_ENV) or (storage or get_storage_config()).database_uri()
    return DatabaseConfig(uri=uri, echo=env_flag(DATABASE_ECHO_ENV))
