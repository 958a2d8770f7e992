"""
Prompt builders and response models for sector experts.
"""

from .formatting import NO_FUNDING_DATA, PromptPair, format_context_blocks, format_funding_db
from .sector_expert import (
    DataCompletenessReport,
    SchemaModel,
    SectorExpertOutput,
    build_sector_expert_prompt,
)
from .specialist import SpecialistOutput, build_specialist_prompt

__all__ = [
    'NO_FUNDING_DATA',
    'PromptPair',
    'format_context_blocks',
    'format_funding_db',
    'DataCompletenessReport',
    'SchemaModel',
    'SectorExpertOutput',
    'build_sector_expert_prompt',
    'SpecialistOutput',
    'build_specialist_prompt',
]
