"""
Upload validation shared by the client and the server.

The server runs this on every request and its verdict is authoritative.
The client runs the same function before uploading so obviously bad files
never leave the user's machine.
"""

from .models import ERROR_MESSAGES, ErrorKind

PDF_MEDIA_TYPE = "application/pdf"

# 10 MiB
MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class UploadValidationError(Exception):
    """Raised when an upload is rejected before any processing."""

    status_code = 400

    def __init__(self, kind: ErrorKind, message: str | None = None):
        self.kind = kind
        self.message = message or ERROR_MESSAGES[kind]
        super().__init__(self.message)


def validate_upload(
    content_type: str | None,
    size: int | None,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> None:
    """
    Accept an upload only if it is a PDF no larger than ``max_bytes``.

    The media type must equal ``application/pdf`` exactly; parameters,
    different casing or ``application/octet-stream`` are all rejected.
    The type is checked before the size.

    Args:
        content_type: Declared media type of the upload.
        size: Length of the upload in bytes. ``None`` means no file.
        max_bytes: Largest accepted size, inclusive.

    Raises:
        UploadValidationError: With kind ``missing-input``,
            ``invalid-format`` or ``size-limit``.
    """
    if size is None:
        raise UploadValidationError(ErrorKind.MISSING_INPUT)

    if content_type != PDF_MEDIA_TYPE:
        raise UploadValidationError(ErrorKind.INVALID_FORMAT)

    if size > max_bytes:
        raise UploadValidationError(ErrorKind.SIZE_LIMIT)
