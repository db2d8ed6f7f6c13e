"""
Router for the PDF processing endpoint.

Handles:
- PDF upload, validation and heading/summary extraction
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from app.common.models import ErrorKind, ErrorResponse, ExtractionResult
from app.common.validation import UploadValidationError, validate_upload

from ..config import Settings, get_settings
from ..services.ai import AIService, AIServiceError, get_ai_service
from ..services.ai.exceptions import error_for

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["process-pdf"])

# Multipart field holding the PDF
UPLOAD_FIELD = "pdf"


@router.post(
    "/process-pdf",
    response_model=ExtractionResult,
    responses={
        400: {"model": ErrorResponse, "description": "Missing, non-PDF or oversized upload"},
        429: {"model": ErrorResponse, "description": "Provider rate limit or quota exhausted"},
        500: {"model": ErrorResponse, "description": "Processing failed"},
    },
)
async def process_pdf(
    request: Request,
    ai_service: Annotated[AIService, Depends(get_ai_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ExtractionResult:
    """
    Extract the headings and a summary from an uploaded PDF.

    Expects a multipart form with the document in the ``pdf`` field.
    Uploads are validated before the AI service is called, so rejected
    files never reach the provider.
    """
    try:
        form = await request.form()
    except (StarletteHTTPException, MultiPartException) as e:
        logger.warning("Rejected unparsable form: %s", getattr(e, "detail", e))
        raise UploadValidationError(ErrorKind.MISSING_INPUT) from e

    try:
        # Plain text fields come back as str
        upload = form.get(UPLOAD_FIELD)
        if not isinstance(upload, UploadFile):
            raise UploadValidationError(ErrorKind.MISSING_INPUT)

        filename = upload.filename or "document.pdf"
        # Size is known once the part is spooled, so nothing is read for rejected uploads
        validate_upload(upload.content_type, upload.size, settings.max_upload_bytes)
        pdf_bytes = await upload.read()

        logger.info("Processing PDF: %s (%d bytes)", filename, len(pdf_bytes))

        analysis = await ai_service.analyze_pdf(pdf_bytes, filename)

        return ExtractionResult(
            headings=analysis.headings,
            summary=analysis.summary,
            filename=filename,
        )

    except UploadValidationError as e:
        logger.warning("Rejected upload: %s", e.kind.value)
        raise
    except AIServiceError:
        raise
    except Exception as e:
        logger.exception("Unexpected error processing PDF")
        raise error_for(e) from e
    finally:
        await form.close()
