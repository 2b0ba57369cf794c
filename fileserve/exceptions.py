"""Error taxonomy for storage outcomes."""

from enum import Enum


class ErrorKind(str, Enum):
    """
    Caller-visible outcome of a failed storage operation.
    """
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL = "INTERNAL"


class StoreError(Exception):
    """
    Base exception class for all storage errors.
    """
    kind = ErrorKind.INTERNAL

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FileNotFoundInStoreError(StoreError):
    """
    Raised when no record exists for the requested hash.
    """
    kind = ErrorKind.NOT_FOUND


class FileAlreadyExistsError(StoreError):
    """
    Raised when a record with the same hash is already stored.
    """
    kind = ErrorKind.CONFLICT


class StorageInternalError(StoreError):
    """
    Raised when the storage medium fails (I/O, corruption, closed store).
    """
    kind = ErrorKind.INTERNAL
