"""
Pydantic models for the process-pdf wire contract.

Shared by the FastAPI endpoint and the API client so both sides agree on
the JSON structure of successes and failures.
"""

from enum import Enum

from pydantic import BaseModel, Field


class ErrorKind(str, Enum):
    """Every way a process-pdf request can fail."""

    MISSING_INPUT = "missing-input"
    INVALID_FORMAT = "invalid-format"
    SIZE_LIMIT = "size-limit"
    RATE_LIMITED = "rate-limited"
    QUOTA_EXCEEDED = "quota-exceeded"
    UNKNOWN_PROCESSING_ERROR = "unknown-processing-error"


# User-facing message for each error kind
ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.MISSING_INPUT: "No file provided",
    ErrorKind.INVALID_FORMAT: "File must be a PDF",
    ErrorKind.SIZE_LIMIT: "File size must be less than 10MB",
    ErrorKind.RATE_LIMITED: "Rate limit exceeded. Please try again later.",
    ErrorKind.QUOTA_EXCEEDED: "API quota exceeded. Please check your API key.",
    ErrorKind.UNKNOWN_PROCESSING_ERROR: "Failed to process PDF. Please try again.",
}


class ExtractionResult(BaseModel):
    """
    Result of a successful process-pdf request.

    This model matches the response JSON exactly:
    {
        "headings": List[str],
        "summary": str,
        "filename": str
    }

    Headings keep the order the model returned them in. Both text fields
    are model output and may still contain stray markdown.
    """

    headings: list[str] = Field(
        default_factory=list,
        description="Headings and section titles found in the document",
    )
    summary: str = Field(
        ...,
        description="Summary of the document content",
    )
    filename: str = Field(
        ...,
        description="Original filename of the uploaded document",
    )


class ErrorResponse(BaseModel):
    """Error body returned with every 4xx/5xx response."""

    error: str = Field(..., description="Short human-readable error message")
