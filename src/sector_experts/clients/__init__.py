"""
External service clients for the sector expert pipeline.
"""

from .openai_client import (
    CompletionClient,
    CompletionResult,
    OpenAIClient,
    TaskComplexity,
    TokenUsage,
    calculate_cost,
)

__all__ = [
    'CompletionClient',
    'CompletionResult',
    'OpenAIClient',
    'TaskComplexity',
    'TokenUsage',
    'calculate_cost',
]
