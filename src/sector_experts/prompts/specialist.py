"""
Specialist (native) expert prompt and response model.

Native experts run their own execution and ask the model for a flatter,
evidence-first shape: primary metrics with the deal's own values, red and
green flags, a score breakdown and an explicit data completeness judgment.
"""

import json
from typing import Annotated, Literal

from pydantic import Field

from ..models import EnrichedContext, SectorConfig
from .formatting import (
    PromptPair,
    format_bullets,
    format_completeness_rules,
    format_context_blocks,
)
from .sector_expert import DataCompletenessReport, SchemaModel

# =============================================================================
# Response Models
# =============================================================================


DimensionScore = Annotated[int, Field(ge=0, le=25)]


class MetricBenchmark(SchemaModel):
    p25: float | None = None
    median: float | None = None
    p75: float | None = None
    top_decile: float | None = None


class PrimaryMetric(SchemaModel):
    metric_name: str
    deal_value: float | str | None = Field(
        default=None, description='Value extracted from the deal, null if not available'
    )
    source: str = Field(
        default='', description='Where the value comes from (deck page, data room, calculation)'
    )
    benchmark: MetricBenchmark = Field(default_factory=MetricBenchmark)
    percentile_position: float | None = Field(default=None, ge=0, le=100)
    assessment: Literal['exceptional', 'above_average', 'average', 'below_average', 'critical']
    insight: str = ''


class SpecialistRedFlag(SchemaModel):
    flag: str
    severity: Literal['critical', 'major', 'minor']
    evidence: str = ''
    impact: str = ''
    question_to_ask: str = ''
    sector_specific: bool = True


class GreenFlag(SchemaModel):
    flag: str
    strength: Literal['strong', 'moderate']
    evidence: str = ''
    implication: str = ''


class Comparable(SchemaModel):
    name: str
    similarity: str = ''
    outcome: str = ''


class DbComparison(SchemaModel):
    similar_deals_found: int = 0
    this_deals_position: str = ''
    best_comparable: Comparable | None = None
    concerning_comparable: Comparable | None = None


class SpecialistQuestion(SchemaModel):
    question: str
    category: Literal[
        'technical',
        'infrastructure',
        'moat',
        'team',
        'data',
        'business',
        'regulatory',
        'competitive',
    ]
    priority: Literal['must_ask', 'should_ask', 'nice_to_have']
    why: str = ''
    green_flag_answer: str = ''
    red_flag_answer: str = ''


class SpecialistOutput(SchemaModel):
    """Response schema shared by every native sector expert."""

    sector_confidence: int = Field(
        ..., ge=0, le=100, description='Confidence that the deal belongs to this sector'
    )
    sub_sector: str = ''
    primary_metrics: list[PrimaryMetric] = Field(default_factory=list)
    red_flags: list[SpecialistRedFlag] = Field(default_factory=list)
    green_flags: list[GreenFlag] = Field(default_factory=list)
    db_comparison: DbComparison = Field(default_factory=DbComparison)
    sector_questions: list[SpecialistQuestion] = Field(default_factory=list)
    sector_score: int = Field(..., ge=0, le=100)
    score_breakdown: dict[str, DimensionScore] = Field(
        default_factory=dict, description='Score per dimension, each 0-25'
    )
    executive_summary: str
    data_completeness: DataCompletenessReport | None = None


# =============================================================================
# Prompt Builder
# =============================================================================


SYSTEM_PROMPT_TEMPLATE = """# ROLE: {display_name}

You evaluate **{name}** startups for a business angel. {description}

## WHAT TO ASSESS
{focus_areas}

## SUCCESS PATTERNS
{success_patterns}

## RED FLAG PATTERNS
{sector_risks}

## REGULATIONS TO CHECK
{regulations}

## RULES
- Every primaryMetrics entry compares the deal's value with the sector quartiles.
- Red flags carry severity (critical / major / minor), evidence, impact and a question to ask.
- scoreBreakdown has these dimensions, each scored 0-25: {dimensions}.
- sectorScore is the sum of the scoreBreakdown dimensions.

{completeness_rules}

## OUTPUT FORMAT

Respond ONLY with a valid JSON object matching this JSON schema. No markdown,
no introduction, no text outside the JSON.

{schema}"""


def build_specialist_prompt(
    context: EnrichedContext,
    config: SectorConfig,
    focus_areas: tuple[str, ...] = (),
) -> PromptPair:
    """
    Build the prompt for a native sector expert.

    Args:
        context: Deal and enrichment data
        config: Sector knowledge for this expert
        focus_areas: Expert-specific evaluation points

    Returns:
        PromptPair with the system and user prompts
    """
    system = SYSTEM_PROMPT_TEMPLATE.format(
        display_name=config.display_name,
        name=config.name,
        description=config.description,
        focus_areas=format_bullets(focus_areas),
        success_patterns=format_bullets(config.success_patterns),
        sector_risks=format_bullets(config.sector_risks),
        regulations=format_bullets(config.key_regulations),
        dimensions=', '.join(config.score_dimensions),
        completeness_rules=format_completeness_rules(),
        schema=json.dumps(SpecialistOutput.model_json_schema(by_alias=True)),
    )

    user = (
        f'{format_context_blocks(context, config)}\n\n'
        '---\n\n'
        f'Analyze this deal as a {config.name} specialist and respond with the JSON object.'
    )
    return PromptPair(system=system, user=user)
