"""Storage interface shared by every file repository."""

import abc

from common.types import FileMetadata, FileRecord


class FileStore(abc.ABC):
    """
    Durable store of file records keyed by content hash.

    At most one record exists per hash. Implementations raise the errors
    defined in fileserve.exceptions and nothing backend-specific.
    """

    @abc.abstractmethod
    def add_file(self, record: FileRecord) -> FileMetadata:
        """
        Insert a record.

        Raises:
            FileAlreadyExistsError: A record with the same hash is stored
            StorageInternalError: The storage medium failed
        """

    @abc.abstractmethod
    def get_file(self, file_hash: str) -> FileRecord:
        """
        Retrieve the record addressed by hash.

        Raises:
            FileNotFoundInStoreError: No record for the hash
            StorageInternalError: The storage medium failed
        """

    @abc.abstractmethod
    def delete_file(self, file_hash: str) -> None:
        """
        Remove the record addressed by hash.

        Raises:
            FileNotFoundInStoreError: No record for the hash
            StorageInternalError: The storage medium failed
        """

    @abc.abstractmethod
    def close(self) -> None:
        """Release underlying resources. Safe to call more than once."""
