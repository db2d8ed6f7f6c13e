"""Pytest configuration and fixtures."""

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from app.backend.main import app
from app.backend.services.ai import DocumentAnalysis, get_ai_service


class StubAIService:
    """
    Stand-in for AIService that records every call.

    Returns ``analysis`` or raises ``error`` when set.
    """

    def __init__(self):
        self.analysis = DocumentAnalysis(
            headings=["1. Introduction", "2. Methods", "3. Results"],
            summary="A short report describing a study and its findings.",
        )
        self.error: Exception | None = None
        self.calls: list[tuple[bytes, str]] = []

    async def analyze_pdf(self, pdf_bytes: bytes, filename: str) -> DocumentAnalysis:
        self.calls.append((pdf_bytes, filename))
        if self.error is not None:
            raise self.error
        return self.analysis


@pytest.fixture
def stub_ai_service() -> Generator[StubAIService, None, None]:
    """Replace the AI service dependency with a recording stub."""
    stub = StubAIService()
    app.dependency_overrides[get_ai_service] = lambda: stub
    yield stub
    app.dependency_overrides.pop(get_ai_service, None)


@pytest.fixture
def client(stub_ai_service: StubAIService) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """
    Create a minimal valid PDF for testing.

    This is a minimal PDF structure that should be recognized as a valid PDF.
    """
    # Minimal valid PDF structure
    pdf_content = b"""%PDF-1.4
1 0 obj
<< /Type /Catalog /Pages 2 0 R >>
endobj
2 0 obj
<< /Type /Pages /Kids [3 0 R] /Count 1 >>
endobj
3 0 obj
<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R >>
endobj
4 0 obj
<< /Length 44 >>
stream
BT
/F1 12 Tf
100 700 Td
(Test) Tj
ET
endstream
endobj
xref
0 5
0000000000 65535 f
0000000009 00000 n
0000000058 00000 n
0000000115 00000 n
0000000214 00000 n
trailer
<< /Size 5 /Root 1 0 R >>
startxref
306
%%EOF"""
    return pdf_content


@pytest.fixture
def invalid_file_bytes() -> bytes:
    """Create invalid (non-PDF) file bytes for testing."""
    return b"This is not a PDF file"
