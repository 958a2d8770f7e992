"""
Output normalization.

Maps every expert family's output onto the canonical NormalizedResult.

Input is the camelCase dict carried by a validation outcome: either the
validated model dumped back to aliases, or the raw parsed object when schema
validation failed. The raw object can hold anything, so every read goes
through a defensive accessor and every enum goes through a total mapping
function with an explicit default. Normalizers never raise on bad content.
"""

import math
from enum import Enum
from typing import Any, TypeVar

from ..models import (
    BarrierToEntry,
    Benchmark,
    CompetitionIntensity,
    ConsolidationTrend,
    KeyMetric,
    MaturityLevel,
    MetricAssessment,
    NormalizedResult,
    Potential,
    QuestionCategory,
    QuestionPriority,
    RegulatoryComplexity,
    RegulatoryEnvironment,
    SectorConfig,
    SectorDynamics,
    SectorFit,
    SectorOpportunity,
    SectorQuestion,
    SectorRedFlag,
    SectorTiming,
    Severity,
)
from .capper import coerce_score

E = TypeVar('E', bound=Enum)

DEFAULT_SCORE = 50
DEFAULT_EXIT_MULTIPLE = 5.0

# =============================================================================
# Enum Mapping
# =============================================================================


def _lookup(value: Any, table: dict[str, E], default: E) -> E:
    if isinstance(value, Enum):
        value = value.value
    if not isinstance(value, str):
        return default
    return table.get(value.strip().lower(), default)


_MATURITY = {
    'emerging': MaturityLevel.EMERGING,
    'growth': MaturityLevel.GROWING,
    'growing': MaturityLevel.GROWING,
    'mature': MaturityLevel.MATURE,
    'declining': MaturityLevel.DECLINING,
}

_ASSESSMENT = {
    'exceptional': MetricAssessment.EXCEPTIONAL,
    'above_average': MetricAssessment.ABOVE_AVERAGE,
    'average': MetricAssessment.AVERAGE,
    'below_average': MetricAssessment.BELOW_AVERAGE,
    'concerning': MetricAssessment.CONCERNING,
    'critical': MetricAssessment.CONCERNING,
    'cannot_assess': MetricAssessment.AVERAGE,
}

_SEVERITY = {
    'critical': Severity.CRITICAL,
    'high': Severity.MAJOR,
    'major': Severity.MAJOR,
    'medium': Severity.MINOR,
    'minor': Severity.MINOR,
    'low': Severity.MINOR,
}

_POTENTIAL = {
    'high': Potential.HIGH,
    'strong': Potential.HIGH,
    'medium': Potential.MEDIUM,
    'moderate': Potential.MEDIUM,
    'low': Potential.LOW,
}

_REGULATORY = {
    'low': RegulatoryComplexity.LOW,
    'medium': RegulatoryComplexity.MEDIUM,
    'high': RegulatoryComplexity.HIGH,
    'very_high': RegulatoryComplexity.VERY_HIGH,
}

_COMPETITION = {
    'low': CompetitionIntensity.LOW,
    'moderate': CompetitionIntensity.MEDIUM,
    'medium': CompetitionIntensity.MEDIUM,
    'high': CompetitionIntensity.HIGH,
    'intense': CompetitionIntensity.INTENSE,
}

_CONSOLIDATION = {
    'fragmenting': ConsolidationTrend.FRAGMENTING,
    'stable': ConsolidationTrend.STABLE,
    'consolidating': ConsolidationTrend.CONSOLIDATING,
    'winner_take_all': ConsolidationTrend.CONSOLIDATING,
}

_BARRIER = {
    'low': BarrierToEntry.LOW,
    'medium': BarrierToEntry.MEDIUM,
    'high': BarrierToEntry.HIGH,
    'very_high': BarrierToEntry.HIGH,
}

_CATEGORY = {
    'technical': QuestionCategory.TECHNICAL,
    'infrastructure': QuestionCategory.TECHNICAL,
    'business': QuestionCategory.BUSINESS,
    'business_model': QuestionCategory.BUSINESS,
    'unit_economics': QuestionCategory.BUSINESS,
    'regulatory': QuestionCategory.REGULATORY,
    'competitive': QuestionCategory.COMPETITIVE,
    'moat': QuestionCategory.COMPETITIVE,
    'data': QuestionCategory.COMPETITIVE,
}

_PRIORITY = {
    'critical': QuestionPriority.MUST_ASK,
    'must_ask': QuestionPriority.MUST_ASK,
    'high': QuestionPriority.SHOULD_ASK,
    'should_ask': QuestionPriority.SHOULD_ASK,
    'medium': QuestionPriority.NICE_TO_HAVE,
    'low': QuestionPriority.NICE_TO_HAVE,
    'nice_to_have': QuestionPriority.NICE_TO_HAVE,
}

_TIMING = {
    'early_mover': SectorTiming.EARLY,
    'early': SectorTiming.EARLY,
    'right_time': SectorTiming.OPTIMAL,
    'optimal': SectorTiming.OPTIMAL,
    'late_entrant': SectorTiming.LATE,
    'too_late': SectorTiming.LATE,
    'late': SectorTiming.LATE,
}


def map_maturity(value: Any) -> MaturityLevel:
    return _lookup(value, _MATURITY, MaturityLevel.EMERGING)


def map_assessment(value: Any) -> MetricAssessment:
    return _lookup(value, _ASSESSMENT, MetricAssessment.AVERAGE)


def map_severity(value: Any) -> Severity:
    return _lookup(value, _SEVERITY, Severity.MINOR)


def map_potential(value: Any) -> Potential:
    return _lookup(value, _POTENTIAL, Potential.MEDIUM)


def map_regulatory_complexity(value: Any) -> RegulatoryComplexity:
    return _lookup(value, _REGULATORY, RegulatoryComplexity.MEDIUM)


def map_competition(value: Any) -> CompetitionIntensity:
    return _lookup(value, _COMPETITION, CompetitionIntensity.MEDIUM)


def map_consolidation(value: Any) -> ConsolidationTrend:
    return _lookup(value, _CONSOLIDATION, ConsolidationTrend.STABLE)


def map_barrier(value: Any) -> BarrierToEntry:
    return _lookup(value, _BARRIER, BarrierToEntry.MEDIUM)


def map_category(value: Any) -> QuestionCategory:
    return _lookup(value, _CATEGORY, QuestionCategory.BUSINESS)


def map_priority(value: Any) -> QuestionPriority:
    return _lookup(value, _PRIORITY, QuestionPriority.SHOULD_ASK)


def map_timing(value: Any) -> SectorTiming:
    return _lookup(value, _TIMING, SectorTiming.OPTIMAL)


# =============================================================================
# Defensive Accessors
# =============================================================================


def _dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _dicts(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _str(value: Any, default: str = '') -> str:
    if isinstance(value, str):
        return value
    if value is None or isinstance(value, (dict, list)):
        return default
    return str(value)


def _strs(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [_str(item) for item in value if item is not None and _str(item)]


def _finite(value: Any) -> float | None:
    """Finite float for a JSON number, None for anything else (including huge ints)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def _number(value: Any, default: float = 0) -> float:
    number = _finite(value)
    return default if number is None else number


def _metric_value(value: Any) -> float | str | None:
    if isinstance(value, str):
        return value
    return _finite(value)


def _join(*parts: str) -> str:
    return '. '.join(p.strip().rstrip('.') for p in parts if p and p.strip())


def _benchmark(value: Any) -> Benchmark:
    b = _dict(value)
    return Benchmark(
        p25=_number(b.get('p25')),
        median=_number(b.get('median')),
        p75=_number(b.get('p75')),
        top_decile=_number(b.get('topDecile')),
    )


def format_recent_exit(exit_data: dict[str, Any]) -> str | None:
    """Render an exit as 'Company → Acquirer (Nx, YYYY)'."""
    company = _str(exit_data.get('company')).strip()
    if not company:
        return None
    acquirer = _str(exit_data.get('acquirer')).strip() or 'Undisclosed'
    details = []
    multiple = _finite(exit_data.get('multiple'))
    if multiple is not None:
        details.append(f'{multiple:g}x')
    year = exit_data.get('year')
    if year is not None and _str(year):
        details.append(_str(year))
    suffix = f' ({", ".join(details)})' if details else ''
    return f'{company} → {acquirer}{suffix}'


def _executive_summary(output: dict[str, Any]) -> str:
    summary = output.get('executiveSummary')
    if isinstance(summary, dict) and _str(summary.get('verdict')):
        return _str(summary.get('verdict'))
    if isinstance(summary, str) and summary:
        return summary
    fit_reasoning = _str(_dict(output.get('sectorFit')).get('reasoning'))
    if fit_reasoning:
        return fit_reasoning
    return _str(output.get('reasoning'))


# =============================================================================
# Completeness Inputs
# =============================================================================


def metric_values(output: dict[str, Any], metrics_key: str, value_key: str) -> list[Any]:
    """
    Deal value of every reported metric, None where it was unavailable.

    Reads values the same way the normalizers do, so the completeness count
    always agrees with the values shown in key_metrics.
    """
    return [_metric_value(m.get(value_key)) for m in _dicts(_dict(output).get(metrics_key))]


def reported_completeness(output: dict[str, Any]) -> tuple[Any, list[str]]:
    """
    Read the model's own completeness judgment.

    Returns:
        (level, limitations) where level is whatever the model wrote (None if
        absent) and limitations lists the model's limitations followed by one
        'Missing critical data' entry per missing item
    """
    report = _dict(_dict(output).get('dataCompleteness'))
    limitations = _strs(report.get('limitations'))
    limitations += [f'Missing critical data: {m}' for m in _strs(report.get('missingCritical'))]
    return report.get('level'), limitations


# =============================================================================
# Generic (template) Schema
# =============================================================================


def normalize_sector_output(
    output: dict[str, Any],
    sector_name: str,
    default_regulations: list[str] | tuple[str, ...] = (),
    default_exit_multiple: float = DEFAULT_EXIT_MULTIPLE,
) -> NormalizedResult:
    """
    Normalize generic sector expert output.

    Args:
        output: camelCase dict shaped like SectorExpertOutput (or not)
        sector_name: Display name of the sector
        default_regulations: Regulations to report when the output names none
        default_exit_multiple: Exit multiple to report when the output gives none

    Returns:
        NormalizedResult with uncapped scores
    """
    output = _dict(output)
    fit = _dict(output.get('sectorFit'))
    summary = _dict(output.get('executiveSummary'))
    dynamics = _dict(output.get('sectorDynamics'))
    exits = _dict(dynamics.get('exitLandscape'))
    regulatory = _dict(dynamics.get('regulatoryRisk'))

    key_metrics = [
        KeyMetric(
            metric_name=_str(m.get('metricName'), 'Unknown metric'),
            value=_metric_value(m.get('metricValue')),
            sector_benchmark=_benchmark(m.get('benchmark')),
            assessment=map_assessment(m.get('assessment')),
            sector_context=_str(m.get('sectorContext')),
        )
        for m in _dicts(output.get('metricsAnalysis'))
    ]

    red_flags = [
        SectorRedFlag(
            flag=_str(rf.get('flag'), 'Unspecified risk'),
            severity=map_severity(rf.get('severity')),
            sector_reason=_str(rf.get('sectorThreshold')),
        )
        for rf in _dicts(output.get('sectorRedFlags'))
    ]

    opportunities = [
        SectorOpportunity(
            opportunity=_str(o.get('opportunity'), 'Unspecified opportunity'),
            potential=map_potential(o.get('potential')),
            reasoning=_str(o.get('sectorContext')),
        )
        for o in _dicts(output.get('sectorOpportunities'))
    ]

    questions = [
        SectorQuestion(
            question=_str(q.get('question')),
            category=map_category(q.get('category')),
            priority=map_priority(q.get('priority')),
            expected_answer=_str(q.get('goodAnswer')),
            red_flag_answer=_str(q.get('redFlagAnswer')),
        )
        for q in _dicts(output.get('mustAskQuestions'))
        if _str(q.get('question'))
    ]

    key_regulations = regulatory.get('keyRegulations')
    regulations = _strs(key_regulations) if isinstance(key_regulations, list) else []
    if key_regulations is None:
        regulations = list(default_regulations)

    typical_multiple = _dict(exits.get('typicalMultiple')).get('median')

    fit_score = coerce_score(fit.get('score'), default=DEFAULT_SCORE)
    sector_score = coerce_score(
        summary.get('sectorScore', fit.get('score')), default=fit_score
    )

    return NormalizedResult(
        sector_name=sector_name,
        sector_maturity=map_maturity(fit.get('sectorMaturity')),
        key_metrics=key_metrics,
        sector_red_flags=red_flags,
        sector_opportunities=opportunities,
        regulatory_environment=RegulatoryEnvironment(
            complexity=map_regulatory_complexity(regulatory.get('level')),
            key_regulations=regulations,
            compliance_risks=[],
            upcoming_changes=_strs(regulatory.get('upcomingChanges')),
        ),
        sector_dynamics=SectorDynamics(
            competition_intensity=map_competition(dynamics.get('competitionIntensity')),
            consolidation_trend=map_consolidation(dynamics.get('consolidationTrend')),
            barrier_to_entry=map_barrier(dynamics.get('barrierToEntry')),
            typical_exit_multiple=_number(typical_multiple, default_exit_multiple),
            recent_exits=[
                formatted
                for formatted in map(format_recent_exit, _dicts(exits.get('recentExits')))
                if formatted
            ],
        ),
        sector_questions=questions,
        sector_fit=SectorFit(
            score=fit_score,
            strengths=_strs(summary.get('topStrengths')),
            weaknesses=_strs(summary.get('topConcerns')),
            sector_timing=map_timing(fit.get('timingAssessment')),
        ),
        sector_score=sector_score,
        executive_summary=_executive_summary(output),
    )


# =============================================================================
# Specialist (native) Schema
# =============================================================================


def normalize_specialist_output(output: dict[str, Any], config: SectorConfig) -> NormalizedResult:
    """
    Normalize native specialist output.

    The specialist schema carries no sector dynamics or regulatory section,
    so those come from the sector configuration.

    Args:
        output: camelCase dict shaped like SpecialistOutput (or not)
        config: Sector configuration of the expert that produced it

    Returns:
        NormalizedResult with uncapped scores
    """
    output = _dict(output)
    red_flags_raw = _dicts(output.get('redFlags'))
    green_flags_raw = _dicts(output.get('greenFlags'))

    key_metrics = [
        KeyMetric(
            metric_name=_str(m.get('metricName'), 'Unknown metric'),
            value=_metric_value(m.get('dealValue')),
            sector_benchmark=_benchmark(m.get('benchmark')),
            assessment=map_assessment(m.get('assessment')),
            sector_context=_str(m.get('insight')),
        )
        for m in _dicts(output.get('primaryMetrics'))
    ]

    red_flags = [
        SectorRedFlag(
            flag=_str(rf.get('flag'), 'Unspecified risk'),
            severity=map_severity(rf.get('severity')),
            sector_reason=_join(
                _str(rf.get('evidence')),
                f'Impact: {rf["impact"]}' if _str(rf.get('impact')) else '',
                f'Question: {rf["questionToAsk"]}' if _str(rf.get('questionToAsk')) else '',
            ),
        )
        for rf in red_flags_raw
    ]

    opportunities = [
        SectorOpportunity(
            opportunity=_str(gf.get('flag'), 'Unspecified opportunity'),
            potential=map_potential(gf.get('strength')),
            reasoning=_join(_str(gf.get('evidence')), _str(gf.get('implication'))),
        )
        for gf in green_flags_raw
    ]

    questions = [
        SectorQuestion(
            question=_str(q.get('question')),
            category=map_category(q.get('category')),
            priority=map_priority(q.get('priority')),
            expected_answer=_str(q.get('greenFlagAnswer')),
            red_flag_answer=_str(q.get('redFlagAnswer')),
        )
        for q in _dicts(output.get('sectorQuestions'))
        if _str(q.get('question'))
    ]

    score = coerce_score(output.get('sectorScore'), default=DEFAULT_SCORE)

    return NormalizedResult(
        sector_name=config.name,
        sector_maturity=config.maturity,
        key_metrics=key_metrics,
        sector_red_flags=red_flags,
        sector_opportunities=opportunities,
        regulatory_environment=RegulatoryEnvironment(
            complexity=config.regulatory_complexity,
            key_regulations=list(config.key_regulations),
            compliance_risks=[],
            upcoming_changes=list(config.upcoming_changes),
        ),
        sector_dynamics=SectorDynamics(
            competition_intensity=config.competition_intensity,
            consolidation_trend=config.consolidation_trend,
            barrier_to_entry=config.barrier_to_entry,
            typical_exit_multiple=config.typical_exit_multiple,
            recent_exits=[],
        ),
        sector_questions=questions,
        sector_fit=SectorFit(
            score=score,
            strengths=[o.opportunity for o in opportunities],
            weaknesses=[rf.flag for rf in red_flags],
            sector_timing=config.timing,
        ),
        sector_score=score,
        executive_summary=_executive_summary(output),
    )


# =============================================================================
# Failure Default
# =============================================================================


def build_default_result(config: SectorConfig) -> NormalizedResult:
    """Result carried by a failed invocation: score 0, one 'incomplete' flag."""
    return NormalizedResult(
        sector_name=config.name,
        sector_maturity=config.maturity,
        key_metrics=[],
        sector_red_flags=[
            SectorRedFlag(
                flag='Analysis incomplete',
                severity=Severity.MAJOR,
                sector_reason=f'The {config.name} analysis could not be completed',
            )
        ],
        sector_opportunities=[],
        regulatory_environment=RegulatoryEnvironment(
            complexity=config.regulatory_complexity,
            key_regulations=list(config.key_regulations),
            compliance_risks=['Analysis incomplete'],
            upcoming_changes=[],
        ),
        sector_dynamics=SectorDynamics(
            competition_intensity=config.competition_intensity,
            consolidation_trend=config.consolidation_trend,
            barrier_to_entry=config.barrier_to_entry,
            typical_exit_multiple=config.typical_exit_multiple,
            recent_exits=[],
        ),
        sector_questions=[
            SectorQuestion(
                question=config.default_question,
                category=QuestionCategory.BUSINESS,
                priority=QuestionPriority.MUST_ASK,
                expected_answer='Complete metrics with history',
                red_flag_answer='Refusal to share or incomplete metrics',
            )
        ],
        sector_fit=SectorFit(
            score=0,
            strengths=[],
            weaknesses=['Analysis incomplete'],
            sector_timing=config.timing,
        ),
        sector_score=0,
        executive_summary=f'{config.name} sector analysis could not be completed.',
    )
