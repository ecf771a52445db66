"""Where imported notices are stored.

Every notice, its works, parties and the bytes of its attached documents live
in one SQL database. Without ``DATABASE_URI`` that is a SQLite file under the
per-user data directory, so repeated imports on one machine share their
deduplication state.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "noticeingest"
NOTICE_DB_FILENAME: Final[str] = "notices.db"

DATA_DIR_ENV: Final[str] = "NOTICEINGEST_DATA_DIR"
DATABASE_URI_ENV: Final[str] = "DATABASE_URI"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Location of the local notice database."""

    data_dir: Path
    database_filename: str = NOTICE_DB_FILENAME

    def notice_db_path(self, *, create_dir: bool = True) -> Path:
        data_dir = self.data_dir.expanduser().resolve()
        if create_dir:
            data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir / self.database_filename

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.notice_db_path().as_posix()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def _user_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        root = Path(base) if base else Path.home() / "AppData" / "Local"
    else:
        base = os.getenv("XDG_DATA_HOME")
        root = Path(base) if base else Path.home() / ".local" / "share"
    return root / APP_DIR_NAME


def get_storage_config() -> StorageConfig:
    configured = (os.getenv(DATA_DIR_ENV) or "").strip()
    return StorageConfig(data_dir=Path(configured) if configured else _user_data_dir())


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    # a blank DATABASE_URI in a .env file means "use the local notice database"
    uri = (os.getenv(DATABASE_URI_ENV) or "").strip()
    if uri:
        return DatabaseConfig(uri=uri)
    return DatabaseConfig(uri=(storage or get_storage_config()).database_uri())


def get_database_uri() -> str:
    """Compute the database URI, respecting overrides."""

    return get_database_config().uri
