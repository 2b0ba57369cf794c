"""Service layer for business logic."""

from fileserve.services.file_service import FileService

__all__ = [
    "FileService",
]
