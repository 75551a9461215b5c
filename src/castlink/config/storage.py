"""Where castlink keeps its database.

``DATABASE_URI`` wins when set. Otherwise castlink uses a SQLite file in its
data directory: ``CASTLINK_DATA_DIR`` if given, else ``castlink`` under the
platform's per-user data home.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

APP_DIR_NAME: Final[str] = "castlink"
DEFAULT_DB_FILENAME: Final[str] = "castlink.db"
DATA_DIR_ENV: Final[str] = "CASTLINK_DATA_DIR"
DATABASE_URI_ENV: Final[str] = "DATABASE_URI"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """The castlink data directory and the roster database file inside it."""

    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def database_path(self, *, ensure: bool = True) -> Path:
        """Path of the SQLite file; creates the data directory unless ``ensure`` is off."""

        data_dir = self.resolve_data_dir()
        if ensure:
            data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir / self.database_filename

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def _user_data_home() -> Path:
    if os.name == "nt":
        fallback = Path.home() / "AppData" / "Local"
        return Path(optional_env_var("LOCALAPPDATA", str(fallback)))
    fallback = Path.home() / ".local" / "share"
    return Path(optional_env_var("XDG_DATA_HOME", str(fallback)))


def get_storage_config() -> StorageConfig:
    default_dir = _user_data_home() / APP_DIR_NAME
    return StorageConfig(data_dir=Path(optional_env_var(DATA_DIR_ENV, str(default_dir))))


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    uri = os.getenv(DATABASE_URI_ENV, "").strip()
    if uri:
        return DatabaseConfig(uri=uri)
    return DatabaseConfig(uri=(storage or get_storage_config()).database_uri())
