"""Pydantic schemas for API requests and responses."""

from fileserve.schemas.files import FileMetadataResponse
from fileserve.schemas.common import ErrorResponse

__all__ = [
    "FileMetadataResponse",
    "ErrorResponse",
]
