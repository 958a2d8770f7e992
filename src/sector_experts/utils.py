"""
Utility helpers for the sector expert pipeline.

extract_first_json() pulls the first well-formed JSON object out of a model
response. Models are asked for bare JSON but regularly wrap it in markdown
fences or surround it with prose, so fenced blocks are tried first and the
whole text is then decoded from each opening brace in turn.
"""

import json
import re
from typing import Any

_CODE_BLOCK_PATTERNS = (
    re.compile(r'`{3,}(?:json)?\s*([\s\S]*?)`{3,}'),
    re.compile(r'~~~(?:json)?\s*([\s\S]*?)~~~'),
)

_decoder = json.JSONDecoder()


def _is_truncated(error: json.JSONDecodeError, text: str) -> bool:
    """True if decoding ran off the end of the text rather than hitting bad syntax."""
    return error.msg.startswith('Unterminated string') or error.pos >= len(text.rstrip())


def _first_object(text: str) -> dict[str, Any] | None:
    start = text.find('{')
    while start != -1:
        try:
            parsed, _ = _decoder.raw_decode(text, start)
        except json.JSONDecodeError as e:
            # A cut-off response must not yield one of its nested objects
            if _is_truncated(e, text):
                return None
        except ValueError:
            # Integer literal beyond the interpreter's digit limit
            return None
        else:
            if isinstance(parsed, dict):
                return parsed
        start = text.find('{', start + 1)
    return None


def extract_first_json(content: str | None) -> dict[str, Any] | None:
    """
    Extract the first well-formed JSON object from free text.

    Stray braces in surrounding prose are skipped. A response that ends in
    the middle of an object yields None.

    Args:
        content: Raw model response text

    Returns:
        The parsed object, or None if the text contains no complete JSON object
    """
    if not content:
        return None

    for pattern in _CODE_BLOCK_PATTERNS:
        match = pattern.search(content)
        if match:
            parsed = _first_object(match.group(1))
            if parsed is not None:
                return parsed

    return _first_object(content)
