"""
Sector experts.

Sector configurations, native specialists, template-only experts and the
registry that orders them for routing.
"""

from .registry import (
    GENERAL_EXPERT,
    SECTOR_PATTERNS,
    ExpertDescriptor,
    ExpertRegistry,
    build_registry,
)
from .sectors import SECTOR_CONFIGS
from .specialists import SPECIALIST_FOCUS, SPECIALIST_KEYS, build_specialists
from .templates import SECTOR_TEMPLATES, build_template_experts

__all__ = [
    # Registry
    'GENERAL_EXPERT',
    'SECTOR_PATTERNS',
    'ExpertDescriptor',
    'ExpertRegistry',
    'build_registry',
    # Sectors
    'SECTOR_CONFIGS',
    # Experts
    'SPECIALIST_FOCUS',
    'SPECIALIST_KEYS',
    'build_specialists',
    'SECTOR_TEMPLATES',
    'build_template_experts',
]
