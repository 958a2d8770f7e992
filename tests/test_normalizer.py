"""
Tests for output normalization and enum mapping.
"""

import pytest

from sector_experts.experts.sectors import HARDWARE, LEGALTECH, SAAS
from sector_experts.models import (
    BarrierToEntry,
    CompetitionIntensity,
    ConsolidationTrend,
    MaturityLevel,
    MetricAssessment,
    Potential,
    QuestionCategory,
    QuestionPriority,
    RegulatoryComplexity,
    SectorTiming,
    Severity,
)
from sector_experts.pipeline.normalizer import (
    build_default_result,
    format_recent_exit,
    map_assessment,
    map_barrier,
    map_category,
    map_competition,
    map_consolidation,
    map_maturity,
    map_potential,
    map_priority,
    map_regulatory_complexity,
    map_severity,
    map_timing,
    metric_values,
    normalize_sector_output,
    normalize_specialist_output,
    reported_completeness,
)
from sector_experts.pipeline.validator import validate_output
from sector_experts.prompts import SectorExpertOutput, SpecialistOutput


class TestEnumMapping:
    """Every mapping is total: source values map, unknown values default."""

    def test_severity(self):
        assert map_severity("critical") == Severity.CRITICAL
        assert map_severity("high") == Severity.MAJOR
        assert map_severity("medium") == Severity.MINOR
        assert map_severity("major") == Severity.MAJOR
        assert map_severity("minor") == Severity.MINOR
        assert map_severity("catastrophic") == Severity.MINOR

    def test_competition(self):
        assert map_competition("moderate") == CompetitionIntensity.MEDIUM
        assert map_competition("intense") == CompetitionIntensity.INTENSE
        assert map_competition("fierce") == CompetitionIntensity.MEDIUM

    def test_consolidation(self):
        assert map_consolidation("winner_take_all") == ConsolidationTrend.CONSOLIDATING
        assert map_consolidation("fragmenting") == ConsolidationTrend.FRAGMENTING
        assert map_consolidation(None) == ConsolidationTrend.STABLE

    def test_barrier(self):
        assert map_barrier("very_high") == BarrierToEntry.HIGH
        assert map_barrier("none") == BarrierToEntry.MEDIUM

    def test_maturity(self):
        assert map_maturity("growth") == MaturityLevel.GROWING
        assert map_maturity("declining") == MaturityLevel.DECLINING
        assert map_maturity("") == MaturityLevel.EMERGING

    def test_assessment(self):
        assert map_assessment("critical") == MetricAssessment.CONCERNING
        assert map_assessment("cannot_assess") == MetricAssessment.AVERAGE
        assert map_assessment("Above_Average") == MetricAssessment.ABOVE_AVERAGE
        assert map_assessment(42) == MetricAssessment.AVERAGE

    def test_category(self):
        assert map_category("business_model") == QuestionCategory.BUSINESS
        assert map_category("unit_economics") == QuestionCategory.BUSINESS
        assert map_category("infrastructure") == QuestionCategory.TECHNICAL
        assert map_category("moat") == QuestionCategory.COMPETITIVE
        assert map_category("team") == QuestionCategory.BUSINESS

    def test_priority(self):
        assert map_priority("critical") == QuestionPriority.MUST_ASK
        assert map_priority("high") == QuestionPriority.SHOULD_ASK
        assert map_priority("medium") == QuestionPriority.NICE_TO_HAVE
        assert map_priority("urgent") == QuestionPriority.SHOULD_ASK

    def test_potential(self):
        assert map_potential("strong") == Potential.HIGH
        assert map_potential("moderate") == Potential.MEDIUM
        assert map_potential("huge") == Potential.MEDIUM

    def test_regulatory_and_timing(self):
        assert map_regulatory_complexity("very_high") == RegulatoryComplexity.VERY_HIGH
        assert map_regulatory_complexity("extreme") == RegulatoryComplexity.MEDIUM
        assert map_timing("early_mover") == SectorTiming.EARLY
        assert map_timing("too_late") == SectorTiming.LATE
        assert map_timing("late_entrant") == SectorTiming.LATE
        assert map_timing("whenever") == SectorTiming.OPTIMAL

    @pytest.mark.parametrize(
        'mapper,values,canonical',
        [
            (map_severity, ["critical", "high", "medium", "major", "minor"], Severity),
            (map_assessment, ["exceptional", "above_average", "average", "below_average", "critical"], MetricAssessment),
            (map_competition, ["low", "moderate", "high", "intense"], CompetitionIntensity),
            (map_consolidation, ["fragmenting", "stable", "consolidating", "winner_take_all"], ConsolidationTrend),
            (map_barrier, ["low", "medium", "high", "very_high"], BarrierToEntry),
            (map_maturity, ["emerging", "growth", "mature", "declining"], MaturityLevel),
            (map_category, ["technical", "business_model", "regulatory", "competitive", "unit_economics",
                            "infrastructure", "moat", "team", "data", "business"], QuestionCategory),
            (map_priority, ["critical", "high", "medium", "must_ask", "should_ask", "nice_to_have"], QuestionPriority),
            (map_potential, ["high", "medium", "low", "strong", "moderate"], Potential),
            (map_timing, ["early_mover", "right_time", "late_entrant", "too_late"], SectorTiming),
        ],
    )
    def test_schema_values_map_into_canonical_sets(self, mapper, values, canonical):
        """Every source schema value lands in the canonical enum."""
        for value in values:
            assert isinstance(mapper(value), canonical)


class TestFormatRecentExit:
    def test_full_exit(self):
        exit_data = {'company': 'Nest', 'acquirer': 'Google', 'multiple': 10.0, 'year': 2014}
        assert format_recent_exit(exit_data) == 'Nest → Google (10x, 2014)'

    def test_missing_acquirer_and_details(self):
        assert format_recent_exit({'company': 'Ring'}) == 'Ring → Undisclosed'

    def test_missing_company(self):
        assert format_recent_exit({'acquirer': 'Google'}) is None

    def test_huge_multiple_dropped(self):
        assert format_recent_exit({'company': 'Ring', 'multiple': 10 ** 400, 'year': 2018}) == 'Ring → Undisclosed (2018)'


class TestNormalizeSectorOutput:
    """Test normalization of the generic schema."""

    def test_validated_output(self, generic_payload):
        outcome = validate_output(SectorExpertOutput, generic_payload)
        assert outcome.schema_valid

        result = normalize_sector_output(outcome.data, 'Hardware', HARDWARE.key_regulations)

        assert result.sector_name == 'Hardware'
        assert result.sector_maturity == MaturityLevel.GROWING
        assert result.sector_score == 78
        assert result.sector_fit.score == 82
        assert result.sector_fit.sector_timing == SectorTiming.EARLY
        assert result.sector_fit.strengths == ['Margin above median', 'Recurring revenue']
        assert result.sector_fit.weaknesses == ['CM concentration']
        assert result.executive_summary.startswith('Solid hardware play')

    def test_metrics(self, generic_payload):
        result = normalize_sector_output(generic_payload, 'Hardware')
        first, second, third = result.key_metrics

        assert first.metric_name == 'Hardware gross margin'
        assert first.value == 42
        assert first.sector_benchmark.top_decile == 55
        assert first.assessment == MetricAssessment.ABOVE_AVERAGE
        assert first.sector_context == 'Above median for IoT devices.'
        assert second.sector_benchmark.p75 == 0
        assert second.sector_benchmark.top_decile == 0
        assert third.value is None
        assert third.assessment == MetricAssessment.CONCERNING

    def test_percentile_is_not_a_metric_value(self):
        """The shown value and the completeness count read the same field."""
        output = {'metricsAnalysis': [{'metricName': 'NRR', 'metricValue': None, 'percentile': 60}]}
        result = normalize_sector_output(output, 'SaaS')

        assert result.key_metrics[0].value is None
        assert metric_values(output, 'metricsAnalysis', 'metricValue') == [None]

    def test_flags_questions_dynamics(self, generic_payload):
        result = normalize_sector_output(generic_payload, 'Hardware')

        flag = result.sector_red_flags[0]
        assert flag.severity == Severity.MAJOR
        assert flag.sector_reason == 'At least two qualified CMs before Series A'

        opportunity = result.sector_opportunities[0]
        assert opportunity.potential == Potential.HIGH
        assert opportunity.reasoning == 'Installed base of 5k devices'

        question = result.sector_questions[0]
        assert question.priority == QuestionPriority.MUST_ASK
        assert question.category == QuestionCategory.TECHNICAL
        assert question.expected_answer == 'Above 95%'

        dynamics = result.sector_dynamics
        assert dynamics.competition_intensity == CompetitionIntensity.MEDIUM
        assert dynamics.consolidation_trend == ConsolidationTrend.CONSOLIDATING
        assert dynamics.barrier_to_entry == BarrierToEntry.HIGH
        assert dynamics.typical_exit_multiple == 4.5
        assert dynamics.recent_exits == ['Nest → Google (10x, 2014)', 'Ring → Undisclosed']

        regulatory = result.regulatory_environment
        assert regulatory.complexity == RegulatoryComplexity.HIGH
        assert regulatory.key_regulations == ['FCC', 'CE Mark']
        assert regulatory.upcoming_changes == ['EU Cyber Resilience Act']

    def test_default_regulations_when_absent(self):
        result = normalize_sector_output({}, 'Hardware', default_regulations=('FCC', 'UL'))
        assert result.regulatory_environment.key_regulations == ['FCC', 'UL']

    def test_empty_regulation_list_is_kept(self):
        output = {'sectorDynamics': {'regulatoryRisk': {'keyRegulations': []}}}
        result = normalize_sector_output(output, 'Hardware', default_regulations=('FCC',))
        assert result.regulatory_environment.key_regulations == []

    def test_default_exit_multiple(self):
        result = normalize_sector_output({}, 'Biotech', default_exit_multiple=15)
        assert result.sector_dynamics.typical_exit_multiple == 15

    @pytest.mark.parametrize(
        'output',
        [
            {},
            {'sectorFit': None, 'executiveSummary': None},
            {'metricsAnalysis': 'none', 'sectorRedFlags': None, 'mustAskQuestions': [None, 3]},
            {'sectorFit': {'score': 'high'}, 'executiveSummary': {'sectorScore': 240}},
            {'sectorDynamics': {'exitLandscape': {'recentExits': [{'acquirer': 'X'}]}}},
        ],
    )
    def test_sparse_output_is_total(self, output):
        """Any dict normalizes: lists are never None and scores stay in range."""
        result = normalize_sector_output(output, 'Sparse')

        assert isinstance(result.key_metrics, list)
        assert isinstance(result.sector_red_flags, list)
        assert isinstance(result.sector_opportunities, list)
        assert isinstance(result.sector_questions, list)
        assert isinstance(result.sector_dynamics.recent_exits, list)
        assert 0 <= result.sector_score <= 100
        assert 0 <= result.sector_fit.score <= 100

    def test_missing_scores_default_to_50(self):
        result = normalize_sector_output({}, 'Sparse')
        assert result.sector_score == 50
        assert result.sector_fit.score == 50

    def test_out_of_range_score_clamped(self):
        result = normalize_sector_output({'executiveSummary': {'sectorScore': 240}}, 'Sparse')
        assert result.sector_score == 100

    def test_huge_integers_do_not_raise(self):
        huge = 10 ** 400
        output = {
            'sectorFit': {'score': huge},
            'executiveSummary': {'sectorScore': -huge},
            'metricsAnalysis': [{'metricName': 'ARR', 'metricValue': huge, 'benchmark': {'median': huge}}],
            'sectorDynamics': {'exitLandscape': {'typicalMultiple': {'median': huge}}},
        }
        result = normalize_sector_output(output, 'Sparse', default_exit_multiple=4)

        assert result.sector_fit.score == 100
        assert result.sector_score == 0
        assert result.key_metrics[0].value is None
        assert result.key_metrics[0].sector_benchmark.median == 0
        assert result.sector_dynamics.typical_exit_multiple == 4


class TestExecutiveSummaryFallback:
    """The summary comes from the first non-empty location."""

    def test_structured_verdict(self):
        output = {'executiveSummary': {'verdict': 'Verdict'}, 'reasoning': 'Reasoning'}
        assert normalize_sector_output(output, 'X').executive_summary == 'Verdict'

    def test_plain_text_summary(self):
        output = {'executiveSummary': 'Plain', 'reasoning': 'Reasoning'}
        assert normalize_sector_output(output, 'X').executive_summary == 'Plain'

    def test_fit_reasoning(self):
        output = {'executiveSummary': {'verdict': ''}, 'sectorFit': {'reasoning': 'Fit reasoning'}}
        assert normalize_sector_output(output, 'X').executive_summary == 'Fit reasoning'

    def test_top_level_reasoning(self):
        assert normalize_sector_output({'reasoning': 'Reasoning'}, 'X').executive_summary == 'Reasoning'

    def test_empty(self):
        assert normalize_sector_output({}, 'X').executive_summary == ''


class TestNormalizeSpecialistOutput:
    """Test normalization of the native schema."""

    def test_validated_output(self, specialist_payload):
        outcome = validate_output(SpecialistOutput, specialist_payload)
        assert outcome.schema_valid

        result = normalize_specialist_output(outcome.data, LEGALTECH)

        assert result.sector_name == 'LegalTech'
        assert result.sector_score == 74
        assert result.sector_fit.score == 74
        assert result.executive_summary == 'Promising CLM wedge with manageable regulatory risk.'
        assert [m.metric_name for m in result.key_metrics] == [
            'ARR growth YoY',
            'Net Revenue Retention',
            'Sales cycle length (months)',
        ]
        assert result.key_metrics[0].sector_context == 'Fast growth for seed LegalTech.'

    def test_flags(self, specialist_payload):
        result = normalize_specialist_output(specialist_payload, LEGALTECH)

        flag = result.sector_red_flags[0]
        assert flag.severity == Severity.MAJOR
        assert flag.sector_reason == (
            'Product drafts clauses for consumers. '
            'Impact: Regulatory action in several states. '
            'Question: Who reviews generated clauses?'
        )
        assert result.sector_opportunities[0].potential == Potential.HIGH
        assert result.sector_fit.strengths == ['Embedded in CLM workflow']
        assert result.sector_fit.weaknesses == ['UPL exposure']

    def test_questions(self, specialist_payload):
        question = normalize_specialist_output(specialist_payload, LEGALTECH).sector_questions[0]

        assert question.category == QuestionCategory.REGULATORY
        assert question.priority == QuestionPriority.MUST_ASK
        assert question.expected_answer.startswith('Tenant-isolated')

    def test_sector_defaults_from_config(self, specialist_payload):
        result = normalize_specialist_output(specialist_payload, LEGALTECH)

        assert result.regulatory_environment.key_regulations == list(LEGALTECH.key_regulations)
        assert result.regulatory_environment.complexity == RegulatoryComplexity.HIGH
        assert result.sector_dynamics.typical_exit_multiple == 5
        assert result.sector_dynamics.barrier_to_entry == BarrierToEntry.HIGH
        assert result.sector_maturity == MaturityLevel.GROWING

    def test_empty_output(self):
        result = normalize_specialist_output({}, SAAS)

        assert result.key_metrics == []
        assert result.sector_red_flags == []
        assert result.sector_questions == []
        assert result.sector_score == 50

    def test_huge_integers_do_not_raise(self, specialist_payload):
        specialist_payload['sectorScore'] = 10 ** 400
        specialist_payload['primaryMetrics'][0]['dealValue'] = 10 ** 400
        result = normalize_specialist_output(specialist_payload, SAAS)

        assert result.sector_score == 100
        assert result.key_metrics[0].value is None


class TestCompletenessInputs:
    def test_metric_values(self, generic_payload, specialist_payload):
        assert metric_values(generic_payload, 'metricsAnalysis', 'metricValue') == [42, 30, None]
        assert metric_values(specialist_payload, 'primaryMetrics', 'dealValue') == [180, 115, 4]
        assert metric_values({}, 'primaryMetrics', 'dealValue') == []

    def test_reported_completeness(self):
        output = {
            'dataCompleteness': {
                'level': 'minimal',
                'missingCritical': ['NRR', 'CAC'],
                'limitations': ['No cohort data'],
            }
        }
        level, limitations = reported_completeness(output)

        assert level == 'minimal'
        assert limitations == [
            'No cohort data',
            'Missing critical data: NRR',
            'Missing critical data: CAC',
        ]

    def test_reported_completeness_absent(self):
        assert reported_completeness({}) == (None, [])
        assert reported_completeness({'dataCompleteness': None}) == (None, [])


class TestDefaultResult:
    def test_default_result(self):
        result = build_default_result(SAAS)

        assert result.sector_name == 'SaaS B2B'
        assert result.sector_score == 0
        assert result.sector_fit.score == 0
        assert result.sector_red_flags[0].flag == 'Analysis incomplete'
        assert result.sector_red_flags[0].severity == Severity.MAJOR
        assert result.regulatory_environment.compliance_risks == ['Analysis incomplete']
        assert result.sector_questions[0].question == SAAS.default_question
        assert result.sector_questions[0].priority == QuestionPriority.MUST_ASK
        assert result.executive_summary == 'SaaS B2B sector analysis could not be completed.'
        assert result.sector_dynamics.typical_exit_multiple == 8

    def test_default_result_serializes(self):
        data = build_default_result(LEGALTECH).to_dict()

        assert data['sectorName'] == 'LegalTech'
        assert data['sectorRedFlags'][0]['severity'] == 'major'
        assert data['sectorFit']['sectorTiming'] == 'optimal'
        assert data['sectorDynamics']['typicalExitMultiple'] == 5
