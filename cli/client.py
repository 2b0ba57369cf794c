"""HTTP client for communicating with the fileserve service."""

import os
import time
import uuid
from typing import Optional

import httpx

from common.logging_config import get_logger
from common.types import FileMetadata

logger = get_logger(__name__)

DEFAULT_BASE_URL = os.environ.get("FILESERVE_URL", "http://127.0.0.1:8080")

DEFAULT_TIMEOUT = float(os.environ.get("FILESERVE_TIMEOUT", "30"))

DEFAULT_MAX_RETRIES = int(os.environ.get("FILESERVE_MAX_RETRIES", "3"))

RETRY_BACKOFF_MULTIPLIER = 2


class FileServeClientError(Exception):
    """Raised when the server answers with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FileServeClient:
    """HTTP client for the fileserve API with retry logic and error handling."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        transport: Optional[httpx.BaseTransport] = None
    ):
        self.max_retries = max_retries
        self.session = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)
        self.request_id = None
        logger.info(f"Initialized FileServeClient [base_url={base_url}]")

    def close(self) -> None:
        self.session.close()

    def _request_with_retry(self, method: str, endpoint: str, **kwargs) -> httpx.Response:
        """
        Make HTTP request with retry logic on 5xx errors and network failures.

        Args:
            method: HTTP method (GET, POST, DELETE)
            endpoint: API endpoint path
            **kwargs: Additional arguments to pass to httpx request

        Returns:
            HTTP response object

        Raises:
            ConnectionError: If max retries exceeded or connection fails
        """
        last_exception = None

        self.request_id = str(uuid.uuid4())
        kwargs.setdefault('headers', {})['X-Request-ID'] = self.request_id

        logger.debug(f"Making request: {method} {endpoint} [request_id={self.request_id}]")

        for attempt in range(self.max_retries + 1):
            try:
                response = self.session.request(method, endpoint, **kwargs)
            except (httpx.ConnectError, httpx.TimeoutException) as e:
                last_exception = e
                if attempt < self.max_retries:
                    delay = RETRY_BACKOFF_MULTIPLIER ** attempt
                    logger.warning(
                        f"Network error (attempt {attempt + 1}/{self.max_retries + 1}): "
                        f"{method} {endpoint} error={type(e).__name__}, retrying in {delay}s"
                    )
                    time.sleep(delay)
                    continue
                logger.error(f"Network error (max retries exceeded): {method} {endpoint} error={e}")
                break

            if response.status_code >= 500 and attempt < self.max_retries:
                delay = RETRY_BACKOFF_MULTIPLIER ** attempt
                logger.warning(
                    f"Server error (attempt {attempt + 1}/{self.max_retries + 1}): "
                    f"{method} {endpoint} status={response.status_code}, retrying in {delay}s"
                )
                time.sleep(delay)
                continue

            return response

        if isinstance(last_exception, httpx.TimeoutException):
            raise ConnectionError("Request timed out. Server may be overloaded.")
        raise ConnectionError("Cannot connect to fileserve server. Is it running?")

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return
        try:
            detail = response.json().get('detail', response.reason_phrase)
        except ValueError:
            detail = response.reason_phrase
        raise FileServeClientError(f"{response.status_code}: {detail}", response.status_code)

    def upload(self, file_name: str, content: bytes) -> FileMetadata:
        """
        Upload file content under a filename.

        Args:
            file_name: Name sent with the multipart field
            content: File bytes

        Returns:
            Metadata assigned by the server
        """
        response = self._request_with_retry(
            'POST', '/files', files={'f': (file_name, content)}
        )
        self._raise_for_status(response)
        body = response.json()
        return FileMetadata(
            name=body['name'],
            size=body['size'],
            hash=body['hash'],
            content_type=body['contentType'],
        )

    def download(self, file_hash: str) -> bytes:
        """Fetch the payload stored under a hash."""
        response = self._request_with_retry('GET', f'/files/{file_hash}')
        self._raise_for_status(response)
        return response.content

    def delete(self, file_hash: str) -> None:
        """Delete the file stored under a hash."""
        response = self._request_with_retry('DELETE', f'/files/{file_hash}')
        self._raise_for_status(response)
