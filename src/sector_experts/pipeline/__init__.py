"""
Pipeline components: classification, invocation, validation, capping and
normalization.

SectorExpertPipeline, the facade tying them to the expert registry, lives in
sector_experts.pipeline.pipeline and is re-exported from the package root.
"""

from .capper import (
    TIER_CEILINGS,
    CompletenessAssessment,
    ScoreCap,
    apply_score_cap,
    assess_completeness,
    cap_score,
    coerce_score,
)
from .classifier import (
    SectorRouter,
    classify_sector,
    classify_sector_all,
    pattern_matches_sector,
)
from .normalizer import (
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
    normalize_sector_output,
    normalize_specialist_output,
)
from .runner import (
    ExpertResult,
    SectorExpert,
    SectorPromptTemplate,
    SpecialistExpert,
    TemplateExpertAdapter,
)
from .validator import (
    FieldViolation,
    UnverifiedOutput,
    ValidatedOutput,
    ValidationOutcome,
    validate_output,
)

__all__ = [
    # Classification
    'SectorRouter',
    'classify_sector',
    'classify_sector_all',
    'pattern_matches_sector',
    # Invocation
    'ExpertResult',
    'SectorExpert',
    'SectorPromptTemplate',
    'SpecialistExpert',
    'TemplateExpertAdapter',
    # Validation
    'FieldViolation',
    'UnverifiedOutput',
    'ValidatedOutput',
    'ValidationOutcome',
    'validate_output',
    # Capping
    'TIER_CEILINGS',
    'CompletenessAssessment',
    'ScoreCap',
    'apply_score_cap',
    'assess_completeness',
    'cap_score',
    'coerce_score',
    # Normalization
    'build_default_result',
    'format_recent_exit',
    'map_assessment',
    'map_barrier',
    'map_category',
    'map_competition',
    'map_consolidation',
    'map_maturity',
    'map_potential',
    'map_priority',
    'map_regulatory_complexity',
    'map_severity',
    'map_timing',
    'normalize_sector_output',
    'normalize_specialist_output',
]
