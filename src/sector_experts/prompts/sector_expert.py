"""
Generic sector expert prompt and response model.

Template-only experts (biotech, climate, gaming, ...) have no execution logic
of their own: they share this prompt builder and this output schema, and
differ only by their SectorConfig.
"""

import json
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..models import EnrichedContext, SectorConfig
from .formatting import (
    PromptPair,
    format_bullets,
    format_completeness_rules,
    format_context_blocks,
)

# =============================================================================
# Response Models
# =============================================================================


class SchemaModel(BaseModel):
    """
    Base for model response schemas.

    Fields are declared in snake_case and read from the camelCase keys the
    model is asked to produce. Unknown keys are dropped.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra='ignore',
    )


CompletenessLevel = Literal['complete', 'partial', 'minimal']


class GenericSectorFit(SchemaModel):
    verdict: Literal['strong', 'moderate', 'weak', 'poor']
    score: int = Field(..., ge=0, le=100, description='Sector fit score 0-100')
    reasoning: str = ''
    sector_maturity: Literal['emerging', 'growth', 'mature', 'declining'] = 'growth'
    timing_assessment: Literal['early_mover', 'right_time', 'late_entrant', 'too_late'] = (
        'right_time'
    )


class QuartileBenchmark(SchemaModel):
    p25: float | None = None
    median: float | None = None
    p75: float | None = None
    top_decile: float | None = None
    source: str = ''


class MetricAnalysis(SchemaModel):
    metric_name: str
    metric_value: float | str | None = Field(
        default=None, description='Value found in the deal data, null if not available'
    )
    unit: str = ''
    benchmark: QuartileBenchmark = Field(default_factory=QuartileBenchmark)
    percentile: float | None = Field(default=None, ge=0, le=100)
    assessment: Literal['exceptional', 'above_average', 'average', 'below_average', 'critical']
    sector_context: str = ''
    comparison_note: str = ''


class GenericRedFlag(SchemaModel):
    flag: str
    severity: Literal['critical', 'high', 'medium']
    evidence: str = ''
    sector_threshold: str = ''
    impact: str = ''
    question_to_ask: str = ''
    mitigation_path: str = ''


class GenericOpportunity(SchemaModel):
    opportunity: str
    potential: Literal['high', 'medium', 'low']
    evidence: str = ''
    sector_context: str = ''
    comparable_success: str = ''


class VsLeader(SchemaModel):
    leader_name: str = ''
    leader_metrics: str = ''
    gap: str = ''
    catch_up_path: str = ''


class VsMedianCompetitor(SchemaModel):
    positioning: Literal['above', 'at', 'below'] = 'at'
    key_differentiators: list[str] = Field(default_factory=list)
    weaknesses_vs_median: list[str] = Field(default_factory=list)


class FundingComparison(SchemaModel):
    median_raised: float | None = None
    median_valuation: float | None = None
    this_deals_position: str = ''


class CompetitorBenchmark(SchemaModel):
    competitors_analyzed: int = 0
    vs_leader: VsLeader = Field(default_factory=VsLeader)
    vs_median_competitor: VsMedianCompetitor = Field(default_factory=VsMedianCompetitor)
    funding_comparison: FundingComparison = Field(default_factory=FundingComparison)


class ExitMultiple(SchemaModel):
    low: float | None = None
    median: float | None = None
    high: float | None = None
    top_decile: float | None = None


class RecentExit(SchemaModel):
    company: str
    acquirer: str = ''
    multiple: float | None = None
    year: int | None = None


class TimeToExit(SchemaModel):
    typical: float | None = None
    range: str = ''


class ExitLandscape(SchemaModel):
    typical_multiple: ExitMultiple = Field(default_factory=ExitMultiple)
    recent_exits: list[RecentExit] = Field(default_factory=list)
    potential_acquirers: list[str] = Field(default_factory=list)
    time_to_exit_years: TimeToExit = Field(default_factory=TimeToExit)


class RegulatoryRisk(SchemaModel):
    level: Literal['low', 'medium', 'high', 'very_high'] = 'medium'
    key_regulations: list[str] | None = None
    upcoming_changes: list[str] = Field(default_factory=list)
    compliance_cost: str = ''


class GenericSectorDynamics(SchemaModel):
    competition_intensity: Literal['low', 'moderate', 'high', 'intense'] = 'moderate'
    consolidation_trend: Literal['fragmenting', 'stable', 'consolidating', 'winner_take_all'] = (
        'stable'
    )
    barrier_to_entry: Literal['low', 'medium', 'high', 'very_high'] = 'medium'
    exit_landscape: ExitLandscape = Field(default_factory=ExitLandscape)
    regulatory_risk: RegulatoryRisk = Field(default_factory=RegulatoryRisk)


class FormulaBenchmark(SchemaModel):
    good: str = ''
    excellent: str = ''


class UnitEconomicsFormula(SchemaModel):
    name: str
    formula: str = ''
    calculated_value: float | str | None = None
    benchmark: FormulaBenchmark = Field(default_factory=FormulaBenchmark)
    assessment: Literal['excellent', 'good', 'acceptable', 'concerning', 'critical']


class UnitEconomics(SchemaModel):
    formulas: list[UnitEconomicsFormula] = Field(default_factory=list)
    overall_health_score: int | None = Field(default=None, ge=0, le=100)
    verdict: str = ''


class MustAskQuestion(SchemaModel):
    question: str
    category: Literal['technical', 'business_model', 'regulatory', 'competitive', 'unit_economics']
    priority: Literal['critical', 'high', 'medium']
    good_answer: str = ''
    red_flag_answer: str = ''
    why_important: str = ''
    linked_to_risk: str | None = None


class NegotiationPoint(SchemaModel):
    point: str
    evidence: str = ''
    usage: str = ''
    expected_impact: str = ''


class GenericExecutiveSummary(SchemaModel):
    verdict: str
    sector_score: int = Field(..., ge=0, le=100)
    top_strengths: list[str] = Field(default_factory=list, max_length=3)
    top_concerns: list[str] = Field(default_factory=list, max_length=3)
    investment_implication: str = ''
    analysis_confidence: Literal['high', 'medium', 'low'] = 'medium'
    data_gaps: list[str] = Field(default_factory=list)


class DataCompletenessReport(SchemaModel):
    """The model's own judgment of how complete the deal data was."""

    level: CompletenessLevel
    available_data_points: int = Field(default=0, ge=0)
    expected_data_points: int = Field(default=0, ge=0)
    missing_critical: list[str] = Field(default_factory=list)
    limitations: list[str] = Field(default_factory=list)


class SectorExpertOutput(SchemaModel):
    """Response schema for template-only sector experts."""

    sector_fit: GenericSectorFit
    metrics_analysis: list[MetricAnalysis] = Field(default_factory=list)
    sector_red_flags: list[GenericRedFlag] = Field(default_factory=list)
    sector_opportunities: list[GenericOpportunity] = Field(default_factory=list)
    competitor_benchmark: CompetitorBenchmark = Field(default_factory=CompetitorBenchmark)
    sector_dynamics: GenericSectorDynamics = Field(default_factory=GenericSectorDynamics)
    unit_economics: UnitEconomics = Field(default_factory=UnitEconomics)
    must_ask_questions: list[MustAskQuestion] = Field(default_factory=list)
    negotiation_ammo: list[NegotiationPoint] = Field(default_factory=list)
    executive_summary: GenericExecutiveSummary
    data_completeness: DataCompletenessReport | None = None


# =============================================================================
# Prompt Builder
# =============================================================================


SYSTEM_PROMPT_TEMPLATE = """# ROLE: Senior {display_name}

You are a senior sector expert in **{name}** with 15+ years of due diligence
experience for top-tier venture funds. {description}

## QUALITY STANDARDS

- Every claim must be sourced: cite the data point and the benchmark it is compared to.
- Every red flag has a severity (critical / high / medium), the evidence that
  triggers it, the sector threshold it violates, its impact and a validation question.
- Cross-reference every metric with the funding database when it is available.

## {name_upper} SUCCESS PATTERNS
{success_patterns}

## {name_upper} RISKS TO WATCH
{sector_risks}

## REGULATORY LANDSCAPE
{regulations}

## EXIT LANDSCAPE
Typical exit multiple: {exit_multiple:g}x revenue.

## SCORING GRID (sectorScore 0-100)
- 80-100: at least 3 primary KPIs at P75+, excellent unit economics, optimal timing
- 60-79: KPIs mostly at P50+, acceptable unit economics, no critical red flag
- 40-59: mixed KPIs, some below P25, medium red flags present
- 20-39: several KPIs below P25, high red flags, weak unit economics
- 0-19: critical red flags, fundamentally broken economics

{completeness_rules}

## OUTPUT FORMAT

Respond ONLY with a valid JSON object matching this JSON schema. No markdown,
no introduction, no text outside the JSON.

{schema}"""


def build_sector_expert_prompt(context: EnrichedContext, config: SectorConfig) -> PromptPair:
    """
    Build the prompt for a template-only sector expert.

    Args:
        context: Deal and enrichment data
        config: Sector knowledge for this expert

    Returns:
        PromptPair with the system and user prompts
    """
    system = SYSTEM_PROMPT_TEMPLATE.format(
        display_name=config.display_name,
        name=config.name,
        name_upper=config.name.upper(),
        description=config.description,
        success_patterns=format_bullets(config.success_patterns),
        sector_risks=format_bullets(config.sector_risks),
        regulations=format_bullets(config.key_regulations),
        exit_multiple=config.typical_exit_multiple,
        completeness_rules=format_completeness_rules(),
        schema=json.dumps(SectorExpertOutput.model_json_schema(by_alias=True)),
    )

    user = (
        f'# {config.name.upper()} SECTOR ANALYSIS\n\n'
        f'{format_context_blocks(context, config)}\n\n'
        '---\n\n'
        f'Produce the complete {config.name} sector analysis as JSON.'
    )
    return PromptPair(system=system, user=user)
