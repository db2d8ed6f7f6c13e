"""Tests for the AI service, extraction call and provider error mapping."""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock

import httpx
import openai
import pytest

from app.backend.services.ai import (
    EXTRACTION_PROMPT,
    AIService,
    DocumentAnalysis,
    ExtractionFailedError,
    QuotaExceededError,
    RateLimitedError,
    analyze_document,
    classify_provider_error,
)
from app.backend.services.ai.exceptions import error_for
from app.common.models import ErrorKind


def _status_error(
    error_class: type[openai.APIStatusError], status_code: int, code: str | None
) -> openai.APIStatusError:
    """Build an OpenAI status error the way the client raises it."""
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    response = httpx.Response(status_code, request=request)
    body = {"message": "provider error", "type": "error", "code": code}
    return error_class("provider error", response=response, body=body)


def _fake_client(parse: AsyncMock) -> SimpleNamespace:
    """Build an object shaped like AsyncOpenAI with a mocked parse call."""
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(parse=parse)))


def _parsed_response(parsed, refusal=None) -> SimpleNamespace:
    message = SimpleNamespace(parsed=parsed, refusal=refusal)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class TestClassifyProviderError:
    """Tests for mapping provider errors to error kinds."""

    def test_insufficient_quota_code(self):
        """Test that OpenAI's quota code wins over the 429 status."""
        exc = _status_error(openai.RateLimitError, 429, "insufficient_quota")
        assert classify_provider_error(exc) == ErrorKind.QUOTA_EXCEEDED

    def test_rate_limit_error(self):
        """Test that a plain 429 is a rate limit."""
        exc = _status_error(openai.RateLimitError, 429, "rate_limit_exceeded")
        assert classify_provider_error(exc) == ErrorKind.RATE_LIMITED

    def test_other_status_errors_are_unknown(self):
        """Test that structured errors skip message matching."""
        exc = _status_error(openai.InternalServerError, 500, None)
        exc.message = "quota service unavailable"
        assert classify_provider_error(exc) == ErrorKind.UNKNOWN_PROCESSING_ERROR

    def test_message_fallback_rate_limit(self):
        """Test substring matching for errors without a status code."""
        assert classify_provider_error(Exception("rate limit hit")) == ErrorKind.RATE_LIMITED

    def test_message_fallback_quota(self):
        """Test substring matching for quota errors."""
        assert classify_provider_error(Exception("quota exhausted")) == ErrorKind.QUOTA_EXCEEDED

    def test_message_fallback_is_case_insensitive(self):
        """Test that message matching ignores case."""
        assert classify_provider_error(Exception("Rate Limit")) == ErrorKind.RATE_LIMITED

    def test_unmatched_message(self):
        """Test that unknown errors fall through."""
        assert (
            classify_provider_error(ValueError("bad things"))
            == ErrorKind.UNKNOWN_PROCESSING_ERROR
        )

    def test_error_for_builds_matching_subclass(self):
        """Test that wrapped errors carry the status for their kind."""
        rate_limited = error_for(Exception("rate limit"))
        assert isinstance(rate_limited, RateLimitedError)
        assert rate_limited.status_code == 429

        quota = error_for(Exception("quota"))
        assert isinstance(quota, QuotaExceededError)
        assert quota.user_message == "API quota exceeded. Please check your API key."

        unknown = error_for(Exception("nope"))
        assert isinstance(unknown, ExtractionFailedError)
        assert unknown.status_code == 500


class TestAnalyzeDocument:
    """Tests for the structured-output extraction call."""

    @pytest.mark.asyncio
    async def test_returns_parsed_analysis(self, sample_pdf_bytes: bytes):
        """Test that the parsed model output is returned unchanged."""
        analysis = DocumentAnalysis(headings=["Intro"], summary="About things.")
        parse = AsyncMock(return_value=_parsed_response(analysis))

        result = await analyze_document(
            sample_pdf_bytes, "doc.pdf", client=_fake_client(parse), model="gpt-4.1"
        )

        assert result == analysis

    @pytest.mark.asyncio
    async def test_sends_prompt_document_and_schema(self, sample_pdf_bytes: bytes):
        """Test the request sent to the provider."""
        analysis = DocumentAnalysis(headings=[], summary="")
        parse = AsyncMock(return_value=_parsed_response(analysis))

        await analyze_document(
            sample_pdf_bytes, "doc.pdf", client=_fake_client(parse), model="gpt-4.1"
        )

        kwargs = parse.await_args.kwargs
        assert kwargs["model"] == "gpt-4.1"
        assert kwargs["response_format"] is DocumentAnalysis

        content = kwargs["messages"][0]["content"]
        assert content[0] == {"type": "text", "text": EXTRACTION_PROMPT}
        assert content[1]["type"] == "file"
        assert content[1]["file"]["filename"] == "doc.pdf"
        assert content[1]["file"]["file_data"].startswith("data:application/pdf;base64,")

    @pytest.mark.asyncio
    async def test_every_call_reaches_provider(self, sample_pdf_bytes: bytes):
        """Test that identical documents are analyzed again."""
        analysis = DocumentAnalysis(headings=["A"], summary="B")
        parse = AsyncMock(return_value=_parsed_response(analysis))
        client = _fake_client(parse)

        await analyze_document(sample_pdf_bytes, "doc.pdf", client=client, model="m")
        await analyze_document(sample_pdf_bytes, "doc.pdf", client=client, model="m")

        assert parse.await_count == 2

    @pytest.mark.asyncio
    async def test_missing_parsed_output_fails(self, sample_pdf_bytes: bytes):
        """Test that output not matching the schema is a processing error."""
        parse = AsyncMock(return_value=_parsed_response(None))

        with pytest.raises(ExtractionFailedError):
            await analyze_document(
                sample_pdf_bytes, "doc.pdf", client=_fake_client(parse), model="m"
            )

    @pytest.mark.asyncio
    async def test_refusal_fails(self, sample_pdf_bytes: bytes):
        """Test that a model refusal is a processing error."""
        parse = AsyncMock(return_value=_parsed_response(None, refusal="I can't help with that."))

        with pytest.raises(ExtractionFailedError) as exc_info:
            await analyze_document(
                sample_pdf_bytes, "doc.pdf", client=_fake_client(parse), model="m"
            )
        assert "refused" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_rate_limit_is_classified(self, sample_pdf_bytes: bytes):
        """Test that provider rate limits surface as RateLimitedError."""
        parse = AsyncMock(
            side_effect=_status_error(openai.RateLimitError, 429, "rate_limit_exceeded")
        )

        with pytest.raises(RateLimitedError):
            await analyze_document(
                sample_pdf_bytes, "doc.pdf", client=_fake_client(parse), model="m"
            )

    @pytest.mark.asyncio
    async def test_quota_is_classified(self, sample_pdf_bytes: bytes):
        """Test that exhausted quota surfaces as QuotaExceededError."""
        parse = AsyncMock(
            side_effect=_status_error(openai.RateLimitError, 429, "insufficient_quota")
        )

        with pytest.raises(QuotaExceededError):
            await analyze_document(
                sample_pdf_bytes, "doc.pdf", client=_fake_client(parse), model="m"
            )

    @pytest.mark.asyncio
    async def test_timeout_fails(self, sample_pdf_bytes: bytes):
        """Test that the wall-clock limit turns into a processing error."""

        async def slow_parse(**kwargs):
            await asyncio.sleep(5)

        parse = AsyncMock(side_effect=slow_parse)

        with pytest.raises(ExtractionFailedError) as exc_info:
            await analyze_document(
                sample_pdf_bytes,
                "doc.pdf",
                client=_fake_client(parse),
                model="m",
                timeout=0.01,
            )
        assert "Timed out" in str(exc_info.value)


class TestAIService:
    """Tests for AIService configuration and mock mode."""

    def test_mock_mode_enabled_without_api_key(self):
        """Test that mock mode is enabled without API key."""
        service = AIService(api_key="", use_mock=False)
        assert service.use_mock is True

    @pytest.mark.asyncio
    async def test_mock_mode_never_builds_client(self, sample_pdf_bytes: bytes):
        """Test that a service without an API key never creates an OpenAI client."""
        service = AIService(api_key="")
        await service.analyze_pdf(sample_pdf_bytes, "doc.pdf")
        assert service._client is None

    def test_mock_mode_enabled_explicitly(self):
        """Test that mock mode can be explicitly enabled."""
        service = AIService(api_key="fake-key", use_mock=True)
        assert service.use_mock is True

    def test_client_is_configured_with_retries_and_timeout(self):
        """Test that retries and the timeout are delegated to the OpenAI client."""
        service = AIService(api_key="fake-key", model="gpt-4.1", max_retries=3, timeout=60)
        client = service.client
        assert isinstance(client, openai.AsyncOpenAI)
        assert client.max_retries == 3
        assert client.timeout == 60

    @pytest.mark.asyncio
    async def test_analyze_pdf_mock(self, sample_pdf_bytes: bytes):
        """Test analyze_pdf in mock mode."""
        service = AIService(use_mock=True)
        result = await service.analyze_pdf(sample_pdf_bytes, "doc.pdf")
        assert isinstance(result, DocumentAnalysis)
        assert result.headings
        assert "DEVELOPMENT MODE" in result.summary

    @pytest.mark.asyncio
    async def test_analyze_pdf_uses_client(self, sample_pdf_bytes: bytes):
        """Test that analyze_pdf calls the configured client."""
        analysis = DocumentAnalysis(headings=["X"], summary="Y")
        parse = AsyncMock(return_value=_parsed_response(analysis))
        service = AIService(api_key="fake-key", model="gpt-4.1")
        service._client = _fake_client(parse)

        result = await service.analyze_pdf(sample_pdf_bytes, "doc.pdf")

        assert result == analysis
        assert parse.await_args.kwargs["model"] == "gpt-4.1"
