"""SQLite-backed file repository."""

import sqlite3

from common.content_hash import verify_content_hash
from common.logging_config import get_logger
from common.types import FileMetadata, FileRecord
from fileserve.config import StoreConfig
from fileserve.database import get_db_connection, init_database
from fileserve.exceptions import (
    FileAlreadyExistsError,
    FileNotFoundInStoreError,
    StorageInternalError,
)
from fileserve.repositories.base import FileStore

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _describe(error: Exception) -> str:
    return f"{type(error).__name__}: {error}"


def _internal_error(operation: str, file_hash: str, detail: str) -> StorageInternalError:
    logger.error(f"Storage failure during {operation} [hash={file_hash}]: {detail}")
    return StorageInternalError(INTERNAL_ERROR_MESSAGE)


class FileRepository(FileStore):
    """
    Stores each record as one row of a single table keyed on the hash column.

    Every operation opens its own short-lived connection, so concurrent
    requests are serialized by sqlite's locking and the primary key.
    """

    def __init__(self, config: StoreConfig):
        self.config = config
        self._closed = False

        try:
            init_database(config)
        except (OSError, sqlite3.Error) as e:
            logger.error(f"Failed to initialize store at {config.database_path}: {e}", exc_info=True)
            raise StorageInternalError(f"Failed to initialize store: {e}") from e

        self._insert_query = (
            f"INSERT INTO {config.table_name} (hash, size, name, contentType, data) "
            "VALUES (?, ?, ?, ?, ?)"
        )
        self._select_query = (
            f"SELECT hash, size, name, contentType, data FROM {config.table_name} WHERE hash = ?"
        )
        self._delete_query = f"DELETE FROM {config.table_name} WHERE hash = ?"

        logger.info(f"File store ready [path={config.database_path}]")

    def _ensure_open(self) -> None:
        if self._closed:
            raise StorageInternalError("File store is closed")

    def add_file(self, record: FileRecord) -> FileMetadata:
        self._ensure_open()
        logger.info(f"Adding file [hash={record.hash}] [content_type={record.content_type}]")

        try:
            with get_db_connection(self.config) as conn:
                cursor = conn.cursor()
                cursor.execute(
                    self._insert_query,
                    (record.hash, record.size, record.name, record.content_type, record.data)
                )
                conn.commit()

                if cursor.rowcount != 1:
                    raise _internal_error(
                        "add", record.hash, f"unexpected rowcount={cursor.rowcount}"
                    )
        except sqlite3.IntegrityError as e:
            if "UNIQUE" in str(e):
                logger.info(f"File already stored [hash={record.hash}]")
                raise FileAlreadyExistsError(f"File with hash {record.hash} already exists") from e
            raise _internal_error("add", record.hash, _describe(e)) from e
        except sqlite3.Error as e:
            raise _internal_error("add", record.hash, _describe(e)) from e

        return record.metadata

    def get_file(self, file_hash: str) -> FileRecord:
        self._ensure_open()

        try:
            with get_db_connection(self.config) as conn:
                cursor = conn.cursor()
                cursor.execute(self._select_query, (file_hash,))
                row = cursor.fetchone()
        except sqlite3.Error as e:
            raise _internal_error("get", file_hash, _describe(e)) from e

        if row is None:
            logger.info(f"File not found [hash={file_hash}]")
            raise FileNotFoundInStoreError(f"File with hash {file_hash} not found")

        try:
            record = FileRecord(
                name=row["name"],
                size=int(row["size"]),
                hash=row["hash"],
                content_type=row["contentType"],
                data=bytes(row["data"]),
            )
        except (TypeError, ValueError) as e:
            raise _internal_error("get", file_hash, _describe(e)) from e

        if self.config.verify_on_read and not verify_content_hash(record.data, record.hash):
            raise _internal_error("get", file_hash, "checksum mismatch on read")

        return record

    def delete_file(self, file_hash: str) -> None:
        self._ensure_open()
        logger.debug(f"Deleting file [hash={file_hash}]")

        try:
            with get_db_connection(self.config) as conn:
                cursor = conn.cursor()
                cursor.execute(self._delete_query, (file_hash,))
                conn.commit()
                count = cursor.rowcount
        except sqlite3.Error as e:
            raise _internal_error("delete", file_hash, _describe(e)) from e

        if count == 0:
            logger.info(f"File not found for delete [hash={file_hash}]")
            raise FileNotFoundInStoreError(f"File with hash {file_hash} not found")

        logger.info(f"File deleted successfully [hash={file_hash}]")

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            logger.info(f"File store closed [path={self.config.database_path}]")
