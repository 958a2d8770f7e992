"""
Static per-sector configuration.

A SectorConfig is everything an expert knows about its sector before it sees
a deal: what to measure, which regulations apply, what the sector usually
looks like. Prompts read it, the normalizer falls back on it, and failed
invocations build their default result from it.
"""

from dataclasses import dataclass

from .result import (
    BarrierToEntry,
    CompetitionIntensity,
    ConsolidationTrend,
    MaturityLevel,
    RegulatoryComplexity,
    SectorTiming,
)


@dataclass(frozen=True)
class SectorConfig:
    """Sector knowledge shared by the prompt, normalizer and failure paths."""

    key: str
    name: str
    display_name: str
    description: str = ''

    # What the expert is asked to evaluate
    key_metrics: tuple[str, ...] = ()
    success_patterns: tuple[str, ...] = ()
    sector_risks: tuple[str, ...] = ()
    score_dimensions: tuple[str, ...] = (
        'metricsVsBenchmarks',
        'unitEconomics',
        'competitivePosition',
        'sectorTiming',
    )

    # Defaults used when the model output says nothing
    maturity: MaturityLevel = MaturityLevel.GROWING
    timing: SectorTiming = SectorTiming.OPTIMAL
    regulatory_complexity: RegulatoryComplexity = RegulatoryComplexity.MEDIUM
    key_regulations: tuple[str, ...] = ()
    upcoming_changes: tuple[str, ...] = ()
    competition_intensity: CompetitionIntensity = CompetitionIntensity.MEDIUM
    consolidation_trend: ConsolidationTrend = ConsolidationTrend.STABLE
    barrier_to_entry: BarrierToEntry = BarrierToEntry.MEDIUM
    typical_exit_multiple: float = 5.0

    default_question: str = 'Can you share your key sector metrics with historical data?'
