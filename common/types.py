"""Shared data type definitions (FileMetadata, FileRecord)."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FileMetadata:
    """
    Metadata describing one stored payload.

    The hash is the SHA-256 digest of the payload and the record's identity.
    """
    name: str
    size: int
    hash: str
    content_type: str = ""


@dataclass(frozen=True)
class FileRecord(FileMetadata):
    """
    Persisted unit: metadata plus the payload bytes it describes.
    """
    data: bytes = field(default=b"", repr=False)

    @property
    def metadata(self) -> FileMetadata:
        return FileMetadata(
            name=self.name,
            size=self.size,
            hash=self.hash,
            content_type=self.content_type,
        )
