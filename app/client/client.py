"""
HTTP client for the process-pdf endpoint.

Validates files locally with the same rules the server enforces, uploads
them as multipart form data and parses the JSON response.
"""

import logging
from pathlib import Path

import httpx

from app.common.models import ERROR_MESSAGES, ErrorKind, ExtractionResult
from app.common.validation import PDF_MEDIA_TYPE, validate_upload

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"
PROCESS_PDF_PATH = "/api/process-pdf"


class ExtractionRequestError(Exception):
    """Raised when the server rejects or fails a process-pdf request."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


def _error_message(response: httpx.Response) -> str:
    """Pull the ``error`` string out of a failed response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return ERROR_MESSAGES[ErrorKind.UNKNOWN_PROCESSING_ERROR]


class PdfExtractionClient:
    """
    Client for the PDF extraction API.

    Can be used as a context manager to close the underlying connection
    pool, or given an existing ``httpx.Client`` (e.g. one with a mock
    transport in tests).
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 60.0,
        http_client: httpx.Client | None = None,
    ):
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(base_url=base_url, timeout=timeout)

    def __enter__(self) -> "PdfExtractionClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def process_pdf(
        self,
        data: bytes,
        filename: str,
        content_type: str = PDF_MEDIA_TYPE,
    ) -> ExtractionResult:
        """
        Upload a PDF and return its headings and summary.

        Args:
            data: Raw file content.
            filename: Name sent with the upload and echoed back.
            content_type: Declared media type of the file.

        Returns:
            ExtractionResult exactly as returned by the server.

        Raises:
            UploadValidationError: The file was rejected locally and not sent.
            ExtractionRequestError: The server answered with an error.
        """
        validate_upload(content_type, len(data))

        logger.info("Uploading %s (%d bytes)", filename, len(data))
        response = self._client.post(
            PROCESS_PDF_PATH,
            files={"pdf": (filename, data, content_type)},
        )

        if response.is_error:
            raise ExtractionRequestError(response.status_code, _error_message(response))

        return ExtractionResult.model_validate(response.json())

    def process_file(self, path: Path | str) -> ExtractionResult:
        """
        Upload a PDF from disk.

        The media type is inferred from the extension: ``.pdf`` files are
        sent as ``application/pdf`` and anything else as
        ``application/octet-stream``, which the validation rejects.
        """
        path = Path(path)
        content_type = (
            PDF_MEDIA_TYPE if path.suffix.lower() == ".pdf" else "application/octet-stream"
        )
        # Reject before reading large files into memory
        validate_upload(content_type, path.stat().st_size)
        return self.process_pdf(path.read_bytes(), path.name, content_type)
