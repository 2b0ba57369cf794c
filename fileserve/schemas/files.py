"""Pydantic schemas for file operation endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from common.types import FileMetadata


class FileMetadataResponse(BaseModel):
    """Response model for an uploaded file."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    size: int
    hash: str
    content_type: str = Field(alias="contentType")

    @classmethod
    def from_metadata(cls, metadata: FileMetadata) -> "FileMetadataResponse":
        return cls(
            name=metadata.name,
            size=metadata.size,
            hash=metadata.hash,
            content_type=metadata.content_type,
        )
