"""Where the workload database lives."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

DATA_DIR_VAR: Final[str] = "IMAGETRIGGER_DATA_DIR"
DATABASE_URI_VAR: Final[str] = "DATABASE_URI"
SQL_ECHO_VAR: Final[str] = "IMAGETRIGGER_SQL_ECHO"
DATABASE_FILENAME: Final[str] = "imagetrigger.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path

    def database_path(self, *, ensure: bool = True) -> Path:
        """Path of the SQLite file; creates the data directory unless ``ensure`` is off."""

        data_dir = self.data_dir.expanduser().resolve()
        if ensure:
            data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir / DATABASE_FILENAME

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str
    echo: bool = False


def _xdg_data_home() -> Path:
    base = os.getenv("XDG_DATA_HOME")
    return Path(base) if base else Path.home() / ".local" / "share"


def get_storage_config() -> StorageConfig:
    data_dir = optional_env_var(DATA_DIR_VAR)
    return StorageConfig(
        data_dir=Path(data_dir) if data_dir else _xdg_data_home() / "imagetrigger",
    )


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """``DATABASE_URI`` wins over the SQLite file in the data directory."""

    echo = (optional_env_var(SQL_ECHO_VAR) or "").lower() in {"1", "true", "yes"}
    uri = optional_env_var(DATABASE_URI_VAR)
    if uri is None:
        uri = (storage or get_storage_config()).database_uri()
    return DatabaseConfig(uri=uri, echo=echo)
