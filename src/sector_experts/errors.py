"""
Custom exceptions and error handling for the sector expert pipeline.

Provides:
- Typed exception hierarchy for different failure modes
- Error context preservation for debugging
- Classification of raw OpenAI exceptions

Schema violations are deliberately absent: a model response that parses but
does not match its schema is handled as data (see pipeline.validator), not as
an exception.
"""

from typing import Any


class SectorExpertError(Exception):
    """Base exception for all sector expert errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message


# =============================================================================
# Client Errors
# =============================================================================


class ClientError(SectorExpertError):
    """Base class for client-related errors."""

    pass


class OpenAIError(ClientError):
    """Error from OpenAI API calls."""

    pass


class OpenAIRateLimitError(OpenAIError):
    """Rate limit exceeded on OpenAI API."""

    pass


class OpenAIModelError(OpenAIError):
    """Model refused request or returned invalid response."""

    pass


class OpenAITimeoutError(OpenAIError):
    """Request to the OpenAI API timed out."""

    pass


# =============================================================================
# Pipeline Errors
# =============================================================================


class PipelineError(SectorExpertError):
    """Base class for pipeline-related errors."""

    pass


class RegistryError(PipelineError):
    """Expert registry is misconfigured or an expert name is unknown."""

    pass


class ExpertInvocationError(PipelineError):
    """Error while running a single expert against a deal."""

    pass


class ModelTimeoutError(ExpertInvocationError):
    """Model completion exceeded the configured expert timeout."""

    pass


class UnparseableResponseError(ExpertInvocationError):
    """Model response contained no extractable JSON object."""

    pass


# =============================================================================
# Error Handling Utilities
# =============================================================================


def wrap_openai_error(exc: Exception, context: dict[str, Any] | None = None) -> OpenAIError:
    """
    Wrap an OpenAI exception in our typed error hierarchy.

    Args:
        exc: The original exception
        context: Additional context for debugging

    Returns:
        Typed OpenAIError subclass
    """
    error_str = str(exc).lower()
    error_type = type(exc).__name__
    ctx = context or {}
    ctx['original_error'] = str(exc)
    ctx['error_type'] = error_type

    if 'rate limit' in error_str or 'rate_limit' in error_str or error_type == 'RateLimitError':
        return OpenAIRateLimitError(
            f"OpenAI rate limit exceeded: {exc}",
            context=ctx,
        )
    elif 'timed out' in error_str or 'timeout' in error_str or error_type == 'APITimeoutError':
        return OpenAITimeoutError(
            f"OpenAI request timed out: {exc}",
            context=ctx,
        )
    elif 'content policy' in error_str or 'refused' in error_str:
        return OpenAIModelError(
            f"OpenAI model refused request: {exc}",
            context=ctx,
        )
    else:
        return OpenAIError(
            f"OpenAI API error: {exc}",
            context=ctx,
        )
