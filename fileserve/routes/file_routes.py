"""File operation API routes."""

from urllib.parse import quote

from fastapi import APIRouter, Depends, File, HTTPException, Request, Response, UploadFile, status
from starlette.concurrency import run_in_threadpool

from fileserve.schemas.common import ErrorResponse
from fileserve.schemas.files import FileMetadataResponse
from fileserve.services.file_service import FileService

router = APIRouter(prefix="/files", tags=["Files"])

DEFAULT_MEDIA_TYPE = "application/octet-stream"


def get_file_service(request: Request) -> FileService:
    """
    Return the FileService created for this application at startup.
    """
    return request.app.state.file_service


def _require_hash(file_hash: str) -> str:
    file_hash = file_hash.strip()
    if not file_hash:
        missing_hash()
    return file_hash


def _content_disposition(file_name: str) -> str:
    quoted = quote(file_name)
    if quoted != file_name:
        return f"attachment; filename*=utf-8''{quoted}"
    return f'attachment; filename="{file_name}"'


@router.post(
    "",
    response_model=FileMetadataResponse,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def upload_file(
    f: UploadFile = File(...),
    file_service: FileService = Depends(get_file_service)
):
    """
    Upload a file and store it under its content hash.

    Parameters:
        - f: File to upload (multipart/form-data)

    Returns:
        - name: Original filename
        - size: File size in bytes
        - hash: SHA-256 hex digest of the content
        - contentType: MIME type guessed from the filename

    Raises:
        - 400: Missing or malformed form field
        - 409: Identical content is already stored
        - 500: Internal server error
    """
    if not f.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded file has no filename"
        )

    data = await f.read()

    metadata = await run_in_threadpool(file_service.add_file, f.filename, data)

    return FileMetadataResponse.from_metadata(metadata)


@router.get("/", include_in_schema=False)
@router.delete("/", include_in_schema=False)
def missing_hash():
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="File hash is required"
    )


@router.get("/{file_hash}", responses={404: {"model": ErrorResponse}})
def download_file(
    file_hash: str,
    request: Request,
    file_service: FileService = Depends(get_file_service)
):
    """
    Download the payload stored under a hash.

    Returns:
        - Raw file bytes with the stored content type

    Raises:
        - 400: Empty hash
        - 404: File not found
        - 500: Internal server error
    """
    file_hash = _require_hash(file_hash)

    record = file_service.get_file(file_hash)

    etag = f'"{record.hash}"'
    if request.headers.get("if-none-match") == etag:
        return Response(status_code=status.HTTP_304_NOT_MODIFIED, headers={"ETag": etag})

    return Response(
        content=record.data,
        media_type=record.content_type or DEFAULT_MEDIA_TYPE,
        headers={
            "Content-Disposition": _content_disposition(record.name),
            "ETag": etag,
        }
    )


@router.delete(
    "/{file_hash}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
)
def delete_file(
    file_hash: str,
    file_service: FileService = Depends(get_file_service)
):
    """
    Delete the file stored under a hash.

    Raises:
        - 400: Empty hash
        - 404: File not found
        - 500: Internal server error
    """
    file_hash = _require_hash(file_hash)

    file_service.delete_file(file_hash)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
