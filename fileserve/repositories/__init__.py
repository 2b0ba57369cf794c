"""Repository layer for data access."""

from fileserve.repositories.base import FileStore
from fileserve.repositories.file_repository import FileRepository
from fileserve.repositories.memory_repository import InMemoryFileRepository

__all__ = [
    "FileStore",
    "FileRepository",
    "InMemoryFileRepository",
]
