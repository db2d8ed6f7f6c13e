"""
Client for the PDF extraction API.

Contains:
- client: httpx client for POST /api/process-pdf
- cleanup: markdown cleanup for displaying results
- cli: the ``pdf-extract`` command line
"""

from .cleanup import CLEANUP_RULES, clean_result, clean_text
from .client import ExtractionRequestError, PdfExtractionClient

__all__ = [
    "CLEANUP_RULES",
    "ExtractionRequestError",
    "PdfExtractionClient",
    "clean_result",
    "clean_text",
]
