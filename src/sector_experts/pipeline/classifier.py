"""
Sector classification.

Maps a deal's free-text sector onto expert descriptors using an ordered
pattern table. Order is the tie-break: the first descriptor with a matching
pattern wins, so more specific sectors are listed before the broad ones they
overlap with.

Matching rules:
- Patterns of 3 characters or fewer must stand alone, bounded by the start
  or end of the text, whitespace or '/'. "ai" matches "AI/ML" but not
  "blockchain" or "retail".
- Longer patterns match anywhere in the text.
- Matching is case-insensitive and ignores surrounding whitespace.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import TYPE_CHECKING, Protocol, Sequence, TypeVar

from ..logging import get_logger

if TYPE_CHECKING:
    from ..experts.registry import ExpertDescriptor, ExpertRegistry

logger = get_logger(__name__)

SHORT_PATTERN_MAX_LENGTH = 3


class Routable(Protocol):
    """Anything the classifier can route to: a name and its patterns."""

    name: str
    patterns: tuple[str, ...]


R = TypeVar('R', bound=Routable)


@lru_cache(maxsize=512)
def _boundary_regex(pattern: str) -> re.Pattern[str]:
    return re.compile(rf'(^|[\s/]){re.escape(pattern)}($|[\s/])', re.IGNORECASE)


def _normalize(text: str | None) -> str:
    return (text or '').strip().lower()


def pattern_matches_sector(sector: str | None, pattern: str) -> bool:
    """
    Check whether a sector string matches one pattern.

    Args:
        sector: Free-text sector, e.g. "LegalTech / CLM"
        pattern: Lower-case pattern from the sector table

    Returns:
        True if the pattern matches under the short/long pattern rules
    """
    text = _normalize(sector)
    pattern = _normalize(pattern)
    if not text or not pattern:
        return False
    if len(pattern) <= SHORT_PATTERN_MAX_LENGTH:
        return _boundary_regex(pattern).search(text) is not None
    return pattern in text


def _matches(sector: str, descriptor: Routable) -> bool:
    return any(pattern_matches_sector(sector, p) for p in descriptor.patterns)


def classify_sector(
    sector: str | None,
    descriptors: Sequence[R],
    fallback: R | None = None,
) -> R | None:
    """
    Pick the first descriptor whose patterns match the sector.

    Args:
        sector: Declared sector of the deal, may be empty
        descriptors: Descriptors in tie-break order
        fallback: Generalist to return when nothing matches, None to disable

    Returns:
        The matching descriptor, the fallback, or None
    """
    text = _normalize(sector)
    if text:
        for descriptor in descriptors:
            if _matches(text, descriptor):
                return descriptor
    return fallback


def classify_sector_all(
    sector: str | None,
    descriptors: Sequence[R],
    fallback: R | None = None,
) -> list[R]:
    """
    Return every descriptor whose patterns match, in table order.

    Descriptors are deduplicated by name. The fallback is returned alone when
    nothing matches and is otherwise never added.
    """
    text = _normalize(sector)
    matched: list[R] = []
    seen: set[str] = set()
    if text:
        for descriptor in descriptors:
            if descriptor.name in seen or not _matches(text, descriptor):
                continue
            seen.add(descriptor.name)
            matched.append(descriptor)

    if not matched and fallback is not None:
        return [fallback]
    return matched


class SectorRouter:
    """
    Binds the classifier to an expert registry.

    Usage:
        router = SectorRouter(registry)
        descriptor = router.route("LegalTech / CLM")
    """

    def __init__(self, registry: ExpertRegistry, use_fallback: bool = True):
        """
        Args:
            registry: Registry holding descriptors in tie-break order
            use_fallback: Route unmatched sectors to the registry's generalist
        """
        self.registry = registry
        self.use_fallback = use_fallback

    @property
    def _fallback(self) -> ExpertDescriptor | None:
        return self.registry.fallback if self.use_fallback else None

    def route(self, sector: str | None) -> ExpertDescriptor | None:
        """Single-expert routing: first match, else the generalist."""
        descriptor = classify_sector(sector, self.registry.routable, self._fallback)
        logger.info(
            'sector_classified',
            declared_sector=sector,
            routed_to=descriptor.name if descriptor else None,
        )
        return descriptor

    def route_all(self, sector: str | None) -> list[ExpertDescriptor]:
        """Multi-expert routing: every match in table order."""
        descriptors = classify_sector_all(sector, self.registry.routable, self._fallback)
        logger.info(
            'sector_classified',
            declared_sector=sector,
            routed_to=[d.name for d in descriptors],
        )
        return descriptors
