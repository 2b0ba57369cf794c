"""In-memory file repository for tests and ephemeral runs."""

import threading
from typing import Dict

from common.types import FileMetadata, FileRecord
from fileserve.exceptions import (
    FileAlreadyExistsError,
    FileNotFoundInStoreError,
    StorageInternalError,
)
from fileserve.repositories.base import FileStore


class InMemoryFileRepository(FileStore):
    """Dictionary-backed store with the same contract as FileRepository."""

    def __init__(self):
        self._records: Dict[str, FileRecord] = {}
        self._lock = threading.Lock()
        self._closed = False

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _ensure_open(self) -> None:
        if self._closed:
            raise StorageInternalError("File store is closed")

    def add_file(self, record: FileRecord) -> FileMetadata:
        with self._lock:
            self._ensure_open()
            if record.hash in self._records:
                raise FileAlreadyExistsError(f"File with hash {record.hash} already exists")
            self._records[record.hash] = record
        return record.metadata

    def get_file(self, file_hash: str) -> FileRecord:
        with self._lock:
            self._ensure_open()
            record = self._records.get(file_hash)
        if record is None:
            raise FileNotFoundInStoreError(f"File with hash {file_hash} not found")
        return record

    def delete_file(self, file_hash: str) -> None:
        with self._lock:
            self._ensure_open()
            if self._records.pop(file_hash, None) is None:
                raise FileNotFoundInStoreError(f"File with hash {file_hash} not found")

    def close(self) -> None:
        with self._lock:
            self._closed = True
