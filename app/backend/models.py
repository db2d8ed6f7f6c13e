"""
Pydantic models for the backend API.

The process-pdf request/response models are shared with the client and
live in ``app.common.models``; they are re-exported here.
"""

from pydantic import BaseModel, Field

from app.common.models import ErrorKind, ErrorResponse, ExtractionResult

from . import __version__

__all__ = ["ErrorKind", "ErrorResponse", "ExtractionResult", "HealthResponse"]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy")
    version: str = Field(default=__version__)
