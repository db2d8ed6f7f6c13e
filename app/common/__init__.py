"""
Code shared by the backend endpoint and the API client.

Contains:
- models: wire models and the error taxonomy
- validation: the upload validation both sides enforce
"""

from .models import ERROR_MESSAGES, ErrorKind, ErrorResponse, ExtractionResult
from .validation import (
    MAX_UPLOAD_BYTES,
    PDF_MEDIA_TYPE,
    UploadValidationError,
    validate_upload,
)

__all__ = [
    "ERROR_MESSAGES",
    "ErrorKind",
    "ErrorResponse",
    "ExtractionResult",
    "MAX_UPLOAD_BYTES",
    "PDF_MEDIA_TYPE",
    "UploadValidationError",
    "validate_upload",
]
