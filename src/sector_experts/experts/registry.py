"""
Expert registry.

Holds the descriptors the classifier routes to, in tie-break order, plus the
generalist fallback. The ordered pattern table below is hand-maintained: a
narrow vertical must come before any broad vertical that would otherwise
swallow it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Mapping, Sequence

from ..clients.openai_client import CompletionClient
from ..errors import RegistryError
from ..logging import get_logger
from ..pipeline.runner import SectorExpert
from .specialists import build_specialists
from .templates import build_template_experts

logger = get_logger(__name__)

GENERAL_EXPERT = 'general-expert'

# =============================================================================
# Pattern Table
# =============================================================================

# NOTE: legaltech-expert comes BEFORE saas-expert so LegalTech companies go to legaltech-expert
# NOTE: hrtech-expert comes BEFORE saas-expert so HRTech companies go to hrtech-expert
# NOTE: ai-expert comes BEFORE deeptech-expert so AI companies go to ai-expert
# NOTE: proptech-expert comes BEFORE marketplace-expert so PropTech companies go to proptech-expert
# NOTE: biotech-expert comes BEFORE healthtech-expert so Life Sciences companies go to biotech-expert
# NOTE: foodtech-expert comes BEFORE climate-expert and consumer-expert so Food/AgTech companies go to foodtech-expert
# NOTE: cybersecurity-expert comes BEFORE deeptech-expert so Security companies go to cybersecurity-expert
# NOTE: creator-expert comes BEFORE gaming-expert so Creator Economy/Media companies go to creator-expert
SECTOR_PATTERNS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ('legaltech-expert', (
        'legaltech', 'legal tech', 'law tech', 'legal software', 'clm',
        'contract lifecycle management', 'legal practice management',
        'legal research', 'e-discovery', 'ediscovery', 'legal ai',
        'legal marketplace', 'legal ops', 'regtech',
    )),
    ('hrtech-expert', (
        'hrtech', 'hr tech', 'hr software', 'human resources', 'people tech',
        'talent tech', 'workforce', 'wfm', 'payroll', 'hris', 'hcm', 'ats',
        'applicant tracking', 'recruiting', 'recruitment', 'talent management',
        'talent acquisition', 'benefits administration', 'benefits tech',
        'employee engagement', 'performance management', 'compensation',
        'comp tech', 'peo', 'eor', 'employer of record',
    )),
    ('saas-expert', ('saas', 'b2b software', 'enterprise software', 'software')),
    ('proptech-expert', (
        'proptech', 'prop tech', 'real estate tech', 'real estate',
        'construction tech', 'contech', 'mortgage tech', 'cre tech',
        'commercial real estate', 'co-working', 'coworking', 'smart building',
    )),
    ('marketplace-expert', ('marketplace', 'platform', 'two-sided')),
    ('fintech-expert', (
        'fintech', 'payments', 'banking', 'insurance', 'insurtech', 'lending',
        'wealthtech', 'neobank',
    )),
    ('biotech-expert', (
        'biotech', 'life sciences', 'pharma', 'drug discovery', 'therapeutics',
        'biopharma', 'gene therapy', 'cell therapy', 'biologics',
        'pharmaceuticals', 'oncology', 'immunotherapy',
    )),
    ('healthtech-expert', (
        'healthtech', 'medtech', 'healthcare', 'digital health', 'femtech',
        'mental health', 'telehealth',
    )),
    ('ai-expert', (
        'ai', 'ai/ml', 'ai / machine learning', 'ml', 'machine learning', 'llm',
        'genai', 'generative ai', 'nlp', 'computer vision', 'deep learning',
        'mlops',
    )),
    ('cybersecurity-expert', (
        'cybersecurity', 'cyber', 'infosec', 'information security',
        'security software', 'network security', 'endpoint security',
        'cloud security', 'application security', 'appsec', 'devsecops',
        'security', 'siem', 'soar', 'xdr', 'edr', 'iam', 'identity',
        'zero trust', 'threat intelligence', 'vulnerability management',
        'mssp', 'soc',
    )),
    # blockchain/web3 has no established standards and goes to general-expert
    ('deeptech-expert', ('deeptech', 'quantum')),
    ('foodtech-expert', (
        'foodtech', 'food tech', 'food', 'f&b', 'agtech', 'agritech',
        'alt protein', 'alternative protein', 'meal kit', 'dark kitchen',
        'ghost kitchen', 'vertical farming', 'plant-based', 'cpg food',
        'food & beverage',
    )),
    ('climate-expert', ('cleantech', 'climate', 'energy', 'sustainability', 'greentech')),
    ('spacetech-expert', (
        'spacetech', 'space tech', 'space', 'aerospace', 'newspace',
        'new space', 'satellite', 'satellites', 'launch', 'launcher', 'rocket',
        'earth observation', 'eo', 'leo', 'geo', 'constellation',
        'space infrastructure', 'in-space', 'orbital',
    )),
    ('hardware-expert', ('hardware', 'iot', 'robotics', 'manufacturing', 'industrial', 'drones')),
    ('creator-expert', (
        'creator economy', 'creator', 'influencer', 'influencer marketing',
        'podcasting', 'podcast', 'newsletter', 'streaming', 'ugc',
        'user generated content', 'creator tools', 'creator platform',
        'patreon', 'substack', 'youtube', 'tiktok', 'twitch', 'onlyfans',
        'talent management', 'mcn', 'multi-channel network', 'digital media',
    )),
    ('gaming-expert', ('gaming', 'esports', 'metaverse', 'vr', 'ar', 'entertainment', 'media tech')),
    ('edtech-expert', (
        'edtech', 'ed tech', 'education', 'education technology', 'e-learning',
        'online learning', 'learning platform', 'corporate learning', 'l&d',
        'k-12', 'higher ed',
    )),
    ('mobility-expert', (
        'mobility', 'transportation', 'logistics', 'ridesharing', 'rideshare',
        'micromobility', 'fleet', 'fleet management', 'delivery', 'last-mile',
        'last mile', 'maas', 'mobility as a service', 'transit', 'freight',
        'trucking', 'shipping', 'supply chain',
    )),
    ('consumer-expert', ('consumer', 'd2c', 'social', 'e-commerce', 'retail', 'lifestyle')),
)


# =============================================================================
# Registry
# =============================================================================


@dataclass(frozen=True)
class ExpertDescriptor:
    """A registered expert: unique name, activating patterns and the expert itself."""

    name: str
    patterns: tuple[str, ...]
    expert: SectorExpert


class ExpertRegistry:
    """
    Ordered collection of expert descriptors.

    Routable descriptors keep insertion order, which is the classifier's
    tie-break order. The fallback is reachable by name but never matched by
    pattern.
    """

    def __init__(
        self,
        descriptors: Sequence[ExpertDescriptor],
        fallback: ExpertDescriptor | None = None,
    ):
        """
        Args:
            descriptors: Routable descriptors in tie-break order
            fallback: Generalist used when no pattern matches

        Raises:
            RegistryError: If two descriptors share a name
        """
        by_name: dict[str, ExpertDescriptor] = {}
        everything = list(descriptors) + ([fallback] if fallback is not None else [])
        for descriptor in everything:
            if descriptor.name in by_name:
                raise RegistryError(
                    f'Duplicate expert name: {descriptor.name}',
                    context={'name': descriptor.name},
                )
            by_name[descriptor.name] = descriptor

        self._routable = tuple(descriptors)
        self._fallback = fallback
        self._by_name = by_name

    @property
    def routable(self) -> tuple[ExpertDescriptor, ...]:
        return self._routable

    @property
    def fallback(self) -> ExpertDescriptor | None:
        return self._fallback

    @property
    def names(self) -> list[str]:
        return list(self._by_name)

    def get(self, name: str) -> ExpertDescriptor | None:
        return self._by_name.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[ExpertDescriptor]:
        return iter(self._by_name.values())

    def __len__(self) -> int:
        return len(self._by_name)

    @classmethod
    def from_table(
        cls,
        experts: Mapping[str, SectorExpert],
        table: Sequence[tuple[str, tuple[str, ...]]] = SECTOR_PATTERNS,
        fallback_name: str | None = GENERAL_EXPERT,
    ) -> ExpertRegistry:
        """
        Build a registry from an ordered pattern table.

        Args:
            experts: Expert instances keyed by name
            table: (expert name, patterns) pairs in tie-break order
            fallback_name: Name of the generalist in `experts`, None for none

        Raises:
            RegistryError: If the table names an expert that was not provided
        """
        missing = [name for name, _ in table if name not in experts]
        if fallback_name is not None and fallback_name not in experts:
            missing.append(fallback_name)
        if missing:
            raise RegistryError(
                'Pattern table references unknown experts',
                context={'missing': missing},
            )

        descriptors = [
            ExpertDescriptor(name=name, patterns=tuple(patterns), expert=experts[name])
            for name, patterns in table
        ]
        fallback = None
        if fallback_name is not None:
            fallback = ExpertDescriptor(name=fallback_name, patterns=(), expert=experts[fallback_name])
        return cls(descriptors, fallback=fallback)


def build_registry(
    client: CompletionClient,
    temperature: float | None = None,
    timeout_seconds: float | None = None,
) -> ExpertRegistry:
    """
    Build the registry of every sector expert bound to one completion client.

    Args:
        client: Model completion client shared by all experts
        temperature: Override for EXPERT_TEMPERATURE
        timeout_seconds: Override for EXPERT_TIMEOUT_SECONDS

    Returns:
        Registry with the full pattern table and the generalist fallback
    """
    experts: dict[str, SectorExpert] = {}
    experts.update(build_specialists(client, temperature, timeout_seconds))
    experts.update(build_template_experts(client, temperature, timeout_seconds))

    registry = ExpertRegistry.from_table(experts)
    logger.info('expert_registry_built', experts=len(registry))
    return registry
