"""Configuration settings for the fileserve server."""

import os
import re
from dataclasses import dataclass
from pathlib import Path


DEFAULT_STORE_DIR = str(Path.home() / ".fileserve")

STORE_DIR = os.environ.get("FILESERVE_STORE_DIR", DEFAULT_STORE_DIR)

SERVER_HOST = os.environ.get("FILESERVE_HOST", "127.0.0.1")

SERVER_PORT = int(os.environ.get("FILESERVE_PORT", "8080"))

VERIFY_ON_READ = os.environ.get("FILESERVE_VERIFY_ON_READ", "false").lower() in ("1", "true", "yes")

DATABASE_FILENAME = "fileserv.db"

TABLE_NAME = "files"

_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class StoreConfig:
    """
    Settings handed to the storage engine at construction time.
    """
    directory: str
    database_filename: str = DATABASE_FILENAME
    table_name: str = TABLE_NAME
    busy_timeout: float = 5.0
    verify_on_read: bool = False

    def __post_init__(self):
        if not _IDENTIFIER_PATTERN.match(self.table_name):
            raise ValueError(f"Invalid table name: {self.table_name!r}")

    @property
    def database_path(self) -> Path:
        return Path(self.directory) / self.database_filename

    @classmethod
    def from_env(cls) -> "StoreConfig":
        return cls(directory=STORE_DIR, verify_on_read=VERIFY_ON_READ)
