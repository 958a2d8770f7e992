"""
Data models for the sector expert pipeline.

Deal and EnrichedContext come in; NormalizedResult goes out.
"""

from .deal import (
    ComparableDeal,
    Competitor,
    Deal,
    EnrichedContext,
    FundingDbContext,
    FundingStage,
)
from .result import (
    BarrierToEntry,
    Benchmark,
    CompetitionIntensity,
    CompletenessTier,
    ConsolidationTrend,
    DataCompleteness,
    KeyMetric,
    MaturityLevel,
    MetricAssessment,
    NormalizedResult,
    Potential,
    QuestionCategory,
    QuestionPriority,
    RegulatoryComplexity,
    RegulatoryEnvironment,
    SectorDynamics,
    SectorFit,
    SectorOpportunity,
    SectorQuestion,
    SectorRedFlag,
    SectorTiming,
    Severity,
)
from .sector import SectorConfig

__all__ = [
    # Inputs
    'ComparableDeal',
    'Competitor',
    'Deal',
    'EnrichedContext',
    'FundingDbContext',
    'FundingStage',
    # Canonical result
    'NormalizedResult',
    'Benchmark',
    'KeyMetric',
    'SectorRedFlag',
    'SectorOpportunity',
    'RegulatoryEnvironment',
    'SectorDynamics',
    'SectorQuestion',
    'SectorFit',
    'DataCompleteness',
    # Canonical enums
    'BarrierToEntry',
    'CompetitionIntensity',
    'CompletenessTier',
    'ConsolidationTrend',
    'MaturityLevel',
    'MetricAssessment',
    'Potential',
    'QuestionCategory',
    'QuestionPriority',
    'RegulatoryComplexity',
    'SectorTiming',
    'Severity',
    # Sector configuration
    'SectorConfig',
]
