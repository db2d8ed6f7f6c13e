"""
Shared exceptions for AI service modules.

Provider failures are classified into the error kinds the API reports.
OpenAI's typed errors are inspected first; message matching is only used
for errors that carry no status or code.
"""

import openai

from app.common.models import ERROR_MESSAGES, ErrorKind

# OpenAI reports an exhausted quota as a 429 with this error code
QUOTA_ERROR_CODE = "insufficient_quota"


class AIServiceError(Exception):
    """Raised when AI service operations fail."""

    kind = ErrorKind.UNKNOWN_PROCESSING_ERROR
    status_code = 500

    @property
    def user_message(self) -> str:
        return ERROR_MESSAGES[self.kind]


class RateLimitedError(AIServiceError):
    """The provider is throttling requests."""

    kind = ErrorKind.RATE_LIMITED
    status_code = 429


class QuotaExceededError(AIServiceError):
    """The provider account has run out of quota."""

    kind = ErrorKind.QUOTA_EXCEEDED
    status_code = 429


class ExtractionFailedError(AIServiceError):
    """Any other failure while talking to the provider or reading its output."""


_ERRORS_BY_KIND: dict[ErrorKind, type[AIServiceError]] = {
    ErrorKind.RATE_LIMITED: RateLimitedError,
    ErrorKind.QUOTA_EXCEEDED: QuotaExceededError,
    ErrorKind.UNKNOWN_PROCESSING_ERROR: ExtractionFailedError,
}


def classify_provider_error(exc: BaseException) -> ErrorKind:
    """
    Map a provider exception to an error kind.

    Args:
        exc: Exception raised while calling the provider.

    Returns:
        ``rate-limited``, ``quota-exceeded`` or ``unknown-processing-error``.
    """
    if isinstance(exc, openai.APIStatusError):
        if getattr(exc, "code", None) == QUOTA_ERROR_CODE:
            return ErrorKind.QUOTA_EXCEEDED
        if isinstance(exc, openai.RateLimitError):
            return ErrorKind.RATE_LIMITED
        return ErrorKind.UNKNOWN_PROCESSING_ERROR

    message = str(exc).lower()
    if "rate limit" in message:
        return ErrorKind.RATE_LIMITED
    if "quota" in message:
        return ErrorKind.QUOTA_EXCEEDED
    return ErrorKind.UNKNOWN_PROCESSING_ERROR


def error_for(exc: BaseException) -> AIServiceError:
    """Wrap a provider exception in the AIServiceError subclass for its kind."""
    error_class = _ERRORS_BY_KIND[classify_provider_error(exc)]
    return error_class(f"PDF processing failed: {exc}")
