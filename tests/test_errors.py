"""
Tests for the errors module.
"""

from sector_experts.errors import (
    ClientError,
    ExpertInvocationError,
    ModelTimeoutError,
    OpenAIError,
    OpenAIModelError,
    OpenAIRateLimitError,
    OpenAITimeoutError,
    PipelineError,
    RegistryError,
    SectorExpertError,
    UnparseableResponseError,
    wrap_openai_error,
)


class TestErrorHierarchy:
    """Test error class hierarchy."""

    def test_base_error_with_context(self):
        """Test that base error captures context."""
        error = SectorExpertError(
            "Something went wrong",
            context={"expert": "saas-expert", "count": 2},
        )

        assert error.message == "Something went wrong"
        assert error.context == {"expert": "saas-expert", "count": 2}
        assert "expert" in str(error)

    def test_base_error_without_context(self):
        """Test error without context."""
        error = SectorExpertError("Simple error")

        assert error.message == "Simple error"
        assert error.context == {}
        assert str(error) == "Simple error"

    def test_pipeline_error_inheritance(self):
        assert issubclass(PipelineError, SectorExpertError)
        assert issubclass(RegistryError, PipelineError)
        assert issubclass(ExpertInvocationError, PipelineError)
        assert issubclass(ModelTimeoutError, ExpertInvocationError)
        assert issubclass(UnparseableResponseError, ExpertInvocationError)

    def test_client_error_inheritance(self):
        assert issubclass(OpenAIError, ClientError)
        assert issubclass(OpenAIRateLimitError, OpenAIError)
        assert issubclass(OpenAITimeoutError, OpenAIError)
        assert issubclass(OpenAIModelError, OpenAIError)


class TestWrapOpenAIError:
    """Test classification of raw OpenAI exceptions."""

    def test_wrap_rate_limit_error(self):
        wrapped = wrap_openai_error(Exception("Rate limit exceeded"))

        assert isinstance(wrapped, OpenAIRateLimitError)
        assert "rate limit" in wrapped.message.lower()

    def test_wrap_timeout_error(self):
        wrapped = wrap_openai_error(Exception("Request timed out"))
        assert isinstance(wrapped, OpenAITimeoutError)

    def test_wrap_refusal(self):
        wrapped = wrap_openai_error(Exception("Model refused: content policy"))
        assert isinstance(wrapped, OpenAIModelError)

    def test_wrap_generic_error(self):
        wrapped = wrap_openai_error(Exception("Unknown error"), context={"model": "gpt-4.1"})

        assert type(wrapped) is OpenAIError
        assert wrapped.context["model"] == "gpt-4.1"
        assert wrapped.context["original_error"] == "Unknown error"
        assert wrapped.context["error_type"] == "Exception"
