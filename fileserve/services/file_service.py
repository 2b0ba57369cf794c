"""File service for business logic."""

import logging
import mimetypes
from typing import Optional

from common.content_hash import compute_content_hash
from common.types import FileMetadata, FileRecord
from fileserve.repositories.base import FileStore

logger = logging.getLogger(__name__)


def guess_content_type(file_name: str) -> str:
    """
    Guess a content type from the filename extension.

    Returns:
        MIME type, or an empty string when the extension is unknown
    """
    content_type, _ = mimetypes.guess_type(file_name or "")
    return content_type or ""


class FileService:
    """
    Facade the HTTP layer talks to: hashes payloads and delegates to a FileStore.
    """

    def __init__(self, store: FileStore):
        self.store = store

    def add_file(
        self,
        file_name: str,
        data: bytes,
        content_type: Optional[str] = None,
    ) -> FileMetadata:
        file_hash = compute_content_hash(data)

        if content_type is None:
            content_type = guess_content_type(file_name)

        logger.info(f"Adding file [hash={file_hash}] [filename={file_name}] [size={len(data)}]")

        record = FileRecord(
            name=file_name,
            size=len(data),
            hash=file_hash,
            content_type=content_type,
            data=data,
        )
        return self.store.add_file(record)

    def get_file(self, file_hash: str) -> FileRecord:
        return self.store.get_file(file_hash)

    def delete_file(self, file_hash: str) -> None:
        self.store.delete_file(file_hash)

    def close(self) -> None:
        self.store.close()
