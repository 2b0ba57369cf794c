"""Entry point for the fileserve HTTP service."""

import time
import uuid
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from common.logging_config import setup_logging
from fileserve.config import SERVER_HOST, SERVER_PORT, StoreConfig
from fileserve.exceptions import ErrorKind, StoreError
from fileserve.repositories.file_repository import FileRepository
from fileserve.routes.file_routes import router as file_router
from fileserve.services.file_service import FileService

logger = setup_logging('fileserve')

ERROR_RESPONSES = {
    ErrorKind.NOT_FOUND: (status.HTTP_404_NOT_FOUND, "FILE_NOT_FOUND"),
    ErrorKind.CONFLICT: (status.HTTP_409_CONFLICT, "FILE_ALREADY_EXISTS"),
    ErrorKind.INTERNAL: (status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR"),
}


def _request_id(request: Request) -> str:
    return getattr(request.state, 'request_id', 'unknown')


async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()

    logger.info(
        f"Request started: {request.method} {request.url.path} [request_id={request_id}]"
    )

    try:
        response = await call_next(request)
    except Exception as exc:
        _log_unhandled(request, exc)
        response = _internal_error_response()

    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s [request_id={request_id}]"
    )

    response.headers["X-Request-ID"] = request_id

    return response


async def store_error_handler(request: Request, exc: StoreError):
    status_code, code = ERROR_RESPONSES[exc.kind]
    if exc.kind == ErrorKind.INTERNAL:
        logger.error(
            f"Storage error: {exc} [request_id={_request_id(request)}] path={request.url.path}"
        )
    else:
        logger.warning(
            f"{code}: {exc} [request_id={_request_id(request)}] path={request.url.path}"
        )
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": code}
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(
        f"Invalid request: {exc.errors()} [request_id={_request_id(request)}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Missing or malformed form field 'f'", "code": "BAD_REQUEST"}
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "code": HTTPStatus(exc.status_code).name},
        headers=getattr(exc, "headers", None)
    )


def _log_unhandled(request: Request, exc: Exception) -> None:
    logger.error(
        f"Unhandled error type {type(exc).__module__}.{type(exc).__name__}: {exc} "
        f"[request_id={_request_id(request)}] path={request.url.path}",
        exc_info=exc
    )


def _internal_error_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "code": "INTERNAL_ERROR"}
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    _log_unhandled(request, exc)
    return _internal_error_response()


def create_app(
    store_config: Optional[StoreConfig] = None,
    file_service: Optional[FileService] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        store_config: Store settings; read from the environment when omitted
        file_service: Pre-built service, used instead of opening a FileRepository

    Returns:
        Configured FastAPI instance
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("fileserve starting up...")

        service = file_service
        if service is None:
            config = store_config or StoreConfig.from_env()
            service = FileService(FileRepository(config))
            logger.info(f"Store initialized at {config.database_path}")

        app.state.file_service = service
        try:
            yield
        finally:
            logger.info("fileserve shutting down...")
            service.close()

    app = FastAPI(
        title="fileserve",
        description="Content-addressed file storage service",
        version="1.0.0",
        lifespan=lifespan
    )

    app.middleware("http")(log_requests)

    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(file_router)

    @app.get("/")
    async def root():
        """
        Root endpoint for health check.
        """
        return {"message": "fileserve API", "status": "running"}

    @app.get("/health")
    async def health_check():
        """
        Health check endpoint.
        Returns 200 if service is alive.
        """
        return {"status": "healthy", "service": "fileserve"}

    return app


app = create_app()


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "fileserve.main:app",
        host=SERVER_HOST,
        port=SERVER_PORT
    )


if __name__ == "__main__":
    main()
