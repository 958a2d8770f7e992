"""
Canonical sector analysis result.

NormalizedResult is the only shape that leaves the pipeline. Every
qualitative field is a closed enum and every score is bounded to [0, 100],
whatever the expert's own output schema looked like. Serialized with
camelCase keys for the UI.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MaturityLevel(str, Enum):
    EMERGING = 'emerging'
    GROWING = 'growing'
    MATURE = 'mature'
    DECLINING = 'declining'


class MetricAssessment(str, Enum):
    EXCEPTIONAL = 'exceptional'
    ABOVE_AVERAGE = 'above_average'
    AVERAGE = 'average'
    BELOW_AVERAGE = 'below_average'
    CONCERNING = 'concerning'


class Severity(str, Enum):
    CRITICAL = 'critical'
    MAJOR = 'major'
    MINOR = 'minor'


class Potential(str, Enum):
    HIGH = 'high'
    MEDIUM = 'medium'
    LOW = 'low'


class RegulatoryComplexity(str, Enum):
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'
    VERY_HIGH = 'very_high'


class CompetitionIntensity(str, Enum):
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'
    INTENSE = 'intense'


class ConsolidationTrend(str, Enum):
    FRAGMENTING = 'fragmenting'
    STABLE = 'stable'
    CONSOLIDATING = 'consolidating'


class BarrierToEntry(str, Enum):
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'


class QuestionCategory(str, Enum):
    TECHNICAL = 'technical'
    BUSINESS = 'business'
    REGULATORY = 'regulatory'
    COMPETITIVE = 'competitive'


class QuestionPriority(str, Enum):
    MUST_ASK = 'must_ask'
    SHOULD_ASK = 'should_ask'
    NICE_TO_HAVE = 'nice_to_have'


class SectorTiming(str, Enum):
    EARLY = 'early'
    OPTIMAL = 'optimal'
    LATE = 'late'


class CompletenessTier(str, Enum):
    """How much of the expected deal data the analysis actually had."""

    COMPLETE = 'complete'
    PARTIAL = 'partial'
    MINIMAL = 'minimal'


class CanonicalModel(BaseModel):
    """Base for result models: immutable, camelCase on the wire."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Benchmark(CanonicalModel):
    """Sector quartiles for one metric. Absent values are 0."""

    p25: float = 0
    median: float = 0
    p75: float = 0
    top_decile: float = 0


class KeyMetric(CanonicalModel):
    metric_name: str
    value: float | str | None = None
    sector_benchmark: Benchmark = Field(default_factory=Benchmark)
    assessment: MetricAssessment = MetricAssessment.AVERAGE
    sector_context: str = ''


class SectorRedFlag(CanonicalModel):
    flag: str
    severity: Severity
    sector_reason: str = ''


class SectorOpportunity(CanonicalModel):
    opportunity: str
    potential: Potential
    reasoning: str = ''


class RegulatoryEnvironment(CanonicalModel):
    complexity: RegulatoryComplexity = RegulatoryComplexity.MEDIUM
    key_regulations: list[str] = Field(default_factory=list)
    compliance_risks: list[str] = Field(default_factory=list)
    upcoming_changes: list[str] = Field(default_factory=list)


class SectorDynamics(CanonicalModel):
    competition_intensity: CompetitionIntensity = CompetitionIntensity.MEDIUM
    consolidation_trend: ConsolidationTrend = ConsolidationTrend.STABLE
    barrier_to_entry: BarrierToEntry = BarrierToEntry.MEDIUM
    typical_exit_multiple: float = 5
    recent_exits: list[str] = Field(default_factory=list)


class SectorQuestion(CanonicalModel):
    question: str
    category: QuestionCategory = QuestionCategory.BUSINESS
    priority: QuestionPriority = QuestionPriority.SHOULD_ASK
    expected_answer: str = ''
    red_flag_answer: str = ''


class SectorFit(CanonicalModel):
    score: int = Field(..., ge=0, le=100)
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    sector_timing: SectorTiming = SectorTiming.OPTIMAL


class DataCompleteness(CanonicalModel):
    """Annotation left by the score capper."""

    level: CompletenessTier
    available_data_points: int = 0
    expected_data_points: int = 0
    raw_score: int = Field(..., ge=0, le=100)
    capped_score: int = Field(..., ge=0, le=100)
    score_capped: bool = False


class NormalizedResult(CanonicalModel):
    """Canonical output of any sector expert."""

    sector_name: str
    sector_maturity: MaturityLevel = MaturityLevel.EMERGING
    key_metrics: list[KeyMetric] = Field(default_factory=list)
    sector_red_flags: list[SectorRedFlag] = Field(default_factory=list)
    sector_opportunities: list[SectorOpportunity] = Field(default_factory=list)
    regulatory_environment: RegulatoryEnvironment = Field(default_factory=RegulatoryEnvironment)
    sector_dynamics: SectorDynamics = Field(default_factory=SectorDynamics)
    sector_questions: list[SectorQuestion] = Field(default_factory=list)
    sector_fit: SectorFit
    sector_score: int = Field(..., ge=0, le=100)
    executive_summary: str = ''

    limitations: list[str] = Field(default_factory=list)
    data_completeness: DataCompleteness | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dict with camelCase keys."""
        return self.model_dump(mode='json', by_alias=True)
