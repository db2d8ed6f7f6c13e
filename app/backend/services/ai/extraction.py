"""
Heading and summary extraction from PDF documents.

Sends the raw PDF to OpenAI as a file content part and uses structured
outputs so the response is parsed straight into a Pydantic model.
"""

import asyncio
import base64
import logging
from typing import Any, Callable

from pydantic import BaseModel, Field

from app.common.validation import PDF_MEDIA_TYPE

from .exceptions import AIServiceError, ExtractionFailedError, error_for

logger = logging.getLogger(__name__)


# =============================================================================
# AI Response Model (for Structured Outputs)
# =============================================================================


class DocumentAnalysis(BaseModel):
    """Structured output requested from the model."""

    headings: list[str] = Field(
        ...,
        description="Array of extracted headings and section titles from the document in plain text format",
    )
    summary: str = Field(
        ...,
        description=(
            "Comprehensive summary of the document content in plain text format, "
            "highlighting main topics and key points"
        ),
    )


# =============================================================================
# Extraction Prompt
# =============================================================================

EXTRACTION_PROMPT = """Please analyze this PDF document and provide:

1. Extract all headings, titles, and section headers. Return them as clean text without any markdown formatting (no **, __, *, etc.). Focus on identifying clear structural elements like chapter titles, section headings, and major topic headers.

2. Generate a comprehensive summary of the document's content. Write in plain text without any markdown formatting. Provide a concise but thorough overview of the main topics, key points, and overall purpose of the document.

Important: Return all text in plain format without any markdown symbols, asterisks, underscores, or other formatting characters. Keep the response clean and readable."""


# =============================================================================
# Helper Functions
# =============================================================================


def _pdf_to_data_url(pdf_bytes: bytes) -> str:
    """Encode PDF bytes as a base64 data URL for the API."""
    encoded = base64.b64encode(pdf_bytes).decode("utf-8")
    return f"data:{PDF_MEDIA_TYPE};base64,{encoded}"


def _build_messages(pdf_bytes: bytes, filename: str) -> list[dict[str, Any]]:
    """Build the single user message holding the prompt and the document."""
    return [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": EXTRACTION_PROMPT},
                {
                    "type": "file",
                    "file": {
                        "filename": filename,
                        "file_data": _pdf_to_data_url(pdf_bytes),
                    },
                },
            ],
        }
    ]


# =============================================================================
# Main Extraction Function
# =============================================================================


async def analyze_document(
    pdf_bytes: bytes,
    filename: str,
    client: Any,  # AsyncOpenAI client
    model: str,
    timeout: float | None = None,
    use_mock: bool = False,
    get_mock_analysis: Callable[[], DocumentAnalysis] | None = None,
) -> DocumentAnalysis:
    """
    Extract headings and a summary from a PDF document.

    Every call goes to the provider; nothing is cached between calls.

    Args:
        pdf_bytes: Raw bytes of the PDF.
        filename: Original filename, passed along with the document.
        client: AsyncOpenAI client instance. Retries are configured on it.
        model: Model name to use.
        timeout: Seconds allowed for the whole call, including retries.
        use_mock: If True, return mock data.
        get_mock_analysis: Function returning mock data (used if use_mock=True).

    Returns:
        DocumentAnalysis parsed from the model response.

    Raises:
        AIServiceError: Classified by the kind of provider failure.
    """
    if use_mock and get_mock_analysis:
        logger.info("Analyzing %s (MOCK MODE)", filename)
        return get_mock_analysis()

    logger.info("Analyzing %s with %s (%d bytes)", filename, model, len(pdf_bytes))

    try:
        response = await asyncio.wait_for(
            client.chat.completions.parse(
                model=model,
                messages=_build_messages(pdf_bytes, filename),
                response_format=DocumentAnalysis,
            ),
            timeout=timeout,
        )

        message = response.choices[0].message

        if getattr(message, "refusal", None):
            raise ExtractionFailedError(f"Model refused to analyze document: {message.refusal}")

        analysis = message.parsed
        if not isinstance(analysis, DocumentAnalysis):
            raise ExtractionFailedError("Model response did not match the expected schema")

        logger.info(
            "Extracted %d headings and a %d character summary from %s",
            len(analysis.headings),
            len(analysis.summary),
            filename,
        )
        return analysis

    except AIServiceError:
        raise
    except asyncio.TimeoutError as e:
        logger.error("Analysis of %s timed out after %s seconds", filename, timeout)
        raise ExtractionFailedError(f"Timed out after {timeout} seconds") from e
    except Exception as e:
        logger.exception("Document analysis failed")
        raise error_for(e) from e
