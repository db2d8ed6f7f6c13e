"""
AI service package for heading and summary extraction.

This package provides:
- extraction: the structured-output call that analyzes a PDF
- exceptions: AI errors and provider error classification

The AIService class holds the configured OpenAI client and delegates
to these modules.
"""

import logging

from app.backend.config import get_settings

from .exceptions import (
    AIServiceError,
    ExtractionFailedError,
    QuotaExceededError,
    RateLimitedError,
    classify_provider_error,
)
from .extraction import EXTRACTION_PROMPT, DocumentAnalysis, analyze_document

logger = logging.getLogger(__name__)

__all__ = [
    "AIService",
    "AIServiceError",
    "DocumentAnalysis",
    "EXTRACTION_PROMPT",
    "ExtractionFailedError",
    "QuotaExceededError",
    "RateLimitedError",
    "analyze_document",
    "classify_provider_error",
    "get_ai_service",
]


# =============================================================================
# AIService Class
# =============================================================================


class AIService:
    """
    Service for AI-powered document analysis.

    Uses an OpenAI model with file input and structured outputs to pull
    the headings and a summary out of a PDF.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        max_retries: int | None = None,
        timeout: float | None = None,
        use_mock: bool = False,
    ):
        """
        Initialize the AI service.

        Args:
            api_key: OpenAI API key. If None, reads from config/environment.
            model: OpenAI model to use (must accept PDF file input).
            max_retries: Retries the OpenAI client makes on transient failures.
            timeout: Seconds allowed for one document, including retries.
            use_mock: If True, return mock data instead of calling OpenAI.
        """
        settings = get_settings()
        if api_key is None:
            api_key = settings.openai_api_key

        self.api_key = api_key
        self.model = model or settings.openai_model
        self.max_retries = settings.max_retries if max_retries is None else max_retries
        self.timeout = timeout or settings.request_timeout_seconds
        self.use_mock = use_mock or not self.api_key
        self._client = None

        if self.use_mock:
            logger.warning(
                "AI Service running in MOCK MODE. Set OPENAI_API_KEY in .env for real extraction."
            )

    @property
    def client(self):
        """Lazy-load the OpenAI client."""
        if self._client is None:
            from openai import AsyncOpenAI

            self._client = AsyncOpenAI(
                api_key=self.api_key,
                max_retries=self.max_retries,
                timeout=self.timeout,
            )
        return self._client

    async def analyze_pdf(self, pdf_bytes: bytes, filename: str) -> DocumentAnalysis:
        """
        Extract headings and a summary from a PDF.

        Delegates to the extraction module.

        Args:
            pdf_bytes: Raw PDF content.
            filename: Original filename of the upload.

        Returns:
            DocumentAnalysis with the headings and summary.
        """
        if self.use_mock:
            return await analyze_document(
                pdf_bytes,
                filename,
                client=None,
                model=self.model,
                use_mock=True,
                get_mock_analysis=self._get_mock_analysis,
            )

        return await analyze_document(
            pdf_bytes,
            filename,
            client=self.client,
            model=self.model,
            timeout=self.timeout,
        )

    def _get_mock_analysis(self) -> DocumentAnalysis:
        """Return a mock analysis for development."""
        return DocumentAnalysis(
            headings=[
                "Introduction",
                "Background",
                "Methodology",
                "Results",
                "Conclusion",
            ],
            summary=(
                "DEVELOPMENT MODE: This is mock data. Set OPENAI_API_KEY "
                "to extract real headings and summaries."
            ),
        )


# =============================================================================
# Singleton Factory
# =============================================================================

_ai_service: AIService | None = None


def get_ai_service() -> AIService:
    """Get or create the AI service singleton."""
    global _ai_service
    if _ai_service is None:
        _ai_service = AIService()
    return _ai_service
