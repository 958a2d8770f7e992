"""
OpenAI client wrapper for the sector expert pipeline.

Handles:
- Text completions with a system prompt and a complexity hint
- Model selection by task complexity
- Retry logic with exponential backoff for transient failures
- Per-call cost accounting from token usage
"""

import os
from dataclasses import dataclass, field
from typing import Literal, Protocol

import openai
from openai import AsyncOpenAI
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..config import config
from ..errors import wrap_openai_error
from ..logging import get_logger

logger = get_logger(__name__)

TaskComplexity = Literal['simple', 'medium', 'complex', 'critical']

# USD per 1K tokens: (input, output)
MODEL_PRICING: dict[str, tuple[float, float]] = {
    'gpt-4.1': (0.002, 0.008),
    'gpt-4.1-mini': (0.0004, 0.0016),
    'gpt-4.1-nano': (0.0001, 0.0004),
    'gpt-4o': (0.0025, 0.01),
    'gpt-4o-mini': (0.00015, 0.0006),
}

# Transient failures worth another attempt
RETRYABLE_ERRORS = (
    openai.RateLimitError,
    openai.APITimeoutError,
    openai.APIConnectionError,
    openai.InternalServerError,
)


@dataclass
class TokenUsage:
    """Token counts reported by the API."""

    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


@dataclass
class CompletionResult:
    """Free-text completion plus what it cost."""

    content: str
    model: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    cost: float = 0.0


class CompletionClient(Protocol):
    """Anything that can answer a prompt. Experts depend on this, not on OpenAI."""

    async def complete(
        self,
        prompt: str,
        system_prompt: str | None = None,
        complexity: TaskComplexity = 'medium',
        temperature: float = 0.7,
    ) -> CompletionResult: ...


def calculate_cost(model: str, usage: TokenUsage) -> float:
    """
    Compute the USD cost of a call from its token usage.

    Dated snapshots (e.g. gpt-4.1-mini-2025-04-14) are priced as their base
    model. Unknown models cost 0.
    """
    pricing = MODEL_PRICING.get(model)
    if pricing is None:
        for name in sorted(MODEL_PRICING, key=len, reverse=True):
            if model.startswith(name):
                pricing = MODEL_PRICING[name]
                break
    if pricing is None:
        return 0.0

    input_cost, output_cost = pricing
    return (usage.input_tokens / 1000) * input_cost + (usage.output_tokens / 1000) * output_cost


class OpenAIClient:
    """
    Async OpenAI client used by every sector expert.

    Configuration via environment variables:
    - OPENAI_API_KEY: Required API key
    - OPENAI_CHAT_MODEL: Model for simple/medium tasks (default: gpt-4.1-mini)
    - OPENAI_COMPLEX_MODEL: Model for complex/critical tasks (default: gpt-4.1)
    - OPENAI_MAX_TOKENS: Completion token limit (default: 16000)
    """

    def __init__(
        self,
        api_key: str | None = None,
        chat_model: str | None = None,
        complex_model: str | None = None,
        max_tokens: int | None = None,
        client: AsyncOpenAI | None = None,
    ):
        """
        Initialize the OpenAI client.

        Args:
            api_key: OpenAI API key (defaults to OPENAI_API_KEY env var)
            chat_model: Model for simple/medium complexity
            complex_model: Model for complex/critical complexity
            max_tokens: Maximum tokens per completion
            client: Pre-built AsyncOpenAI instance (mainly for tests)
        """
        self.api_key = api_key or os.getenv('OPENAI_API_KEY')
        if not self.api_key and client is None:
            raise ValueError('OPENAI_API_KEY environment variable is required')

        self.chat_model = chat_model or config.OPENAI_CHAT_MODEL
        self.complex_model = complex_model or config.OPENAI_COMPLEX_MODEL
        self.max_tokens = max_tokens or config.OPENAI_MAX_TOKENS

        self._client = client or AsyncOpenAI(api_key=self.api_key)

    def select_model(self, complexity: TaskComplexity) -> str:
        """Pick the model for a task complexity."""
        if complexity in ('complex', 'critical'):
            return self.complex_model
        return self.chat_model

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        reraise=True,
    )
    async def _create_chat_completion(
        self,
        model: str,
        messages: list[dict[str, str]],
        temperature: float,
    ):
        return await self._client.chat.completions.create(
            model=model,
            messages=messages,  # type: ignore
            temperature=temperature,
            max_tokens=self.max_tokens,
        )

    async def complete(
        self,
        prompt: str,
        system_prompt: str | None = None,
        complexity: TaskComplexity = 'medium',
        temperature: float = 0.7,
    ) -> CompletionResult:
        """
        Get a free-text completion.

        Args:
            prompt: The user prompt
            system_prompt: Optional system prompt
            complexity: Task complexity hint, drives model selection
            temperature: Sampling temperature

        Returns:
            CompletionResult with content, model, usage and cost

        Raises:
            OpenAIError: If the API call fails after retries
        """
        model = self.select_model(complexity)

        messages: list[dict[str, str]] = []
        if system_prompt:
            messages.append({'role': 'system', 'content': system_prompt})
        messages.append({'role': 'user', 'content': prompt})

        try:
            response = await self._create_chat_completion(
                model=model,
                messages=messages,
                temperature=temperature,
            )
        except Exception as e:
            raise wrap_openai_error(e, context={'model': model, 'complexity': complexity}) from e

        content = response.choices[0].message.content or ''
        usage = TokenUsage(
            input_tokens=getattr(response.usage, 'prompt_tokens', 0) or 0,
            output_tokens=getattr(response.usage, 'completion_tokens', 0) or 0,
        )
        response_model = response.model or model
        cost = calculate_cost(response_model, usage)

        logger.debug(
            'completion_received',
            model=response_model,
            input_tokens=usage.input_tokens,
            output_tokens=usage.output_tokens,
            finish_reason=response.choices[0].finish_reason,
            cost=round(cost, 6),
        )

        return CompletionResult(content=content, model=response_model, usage=usage, cost=cost)

    async def health_check(self) -> dict[str, bool | str]:
        """
        Verify API connectivity with a minimal request.

        Returns:
            Dict with 'healthy' bool and optional 'error' message
        """
        try:
            await self._client.models.retrieve(self.chat_model)
            return {
                'healthy': True,
                'chat_model': self.chat_model,
                'complex_model': self.complex_model,
            }
        except Exception as e:
            return {'healthy': False, 'error': str(e)}

    async def close(self):
        """Close the client connection."""
        await self._client.close()
