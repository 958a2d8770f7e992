"""
Tests for the expert registry and catalogue.
"""

from unittest.mock import AsyncMock

import pytest

from sector_experts.errors import RegistryError
from sector_experts.experts import (
    GENERAL_EXPERT,
    SECTOR_CONFIGS,
    SECTOR_PATTERNS,
    SECTOR_TEMPLATES,
    SPECIALIST_KEYS,
    ExpertDescriptor,
    ExpertRegistry,
    build_registry,
)
from sector_experts.pipeline.runner import SpecialistExpert, TemplateExpertAdapter


@pytest.fixture
def registry():
    return build_registry(AsyncMock())


class TestBuildRegistry:
    """Test the full registry."""

    def test_every_expert_registered(self, registry):
        assert len(registry) == 21
        assert set(registry.names) == set(SECTOR_CONFIGS)

    def test_routable_order_follows_table(self, registry):
        assert [d.name for d in registry.routable] == [name for name, _ in SECTOR_PATTERNS]

    def test_fallback_is_general(self, registry):
        assert registry.fallback.name == GENERAL_EXPERT
        assert registry.fallback not in registry.routable
        assert registry.get(GENERAL_EXPERT) is registry.fallback

    def test_expert_variants(self, registry):
        for name in SPECIALIST_KEYS:
            assert isinstance(registry.get(name).expert, SpecialistExpert)
        for template in SECTOR_TEMPLATES:
            assert isinstance(registry.get(template.name).expert, TemplateExpertAdapter)

    def test_overrides_reach_experts(self):
        registry = build_registry(AsyncMock(), temperature=0.05, timeout_seconds=12)
        expert = registry.get('ai-expert').expert

        assert expert.temperature == 0.05
        assert expert.timeout_seconds == 12

    def test_lookup(self, registry):
        assert 'saas-expert' in registry
        assert registry.get('unknown-expert') is None
        assert len(list(registry)) == 21


class TestRegistryValidation:
    def test_duplicate_names_rejected(self):
        expert = AsyncMock()
        descriptors = [
            ExpertDescriptor(name='a', patterns=('x',), expert=expert),
            ExpertDescriptor(name='a', patterns=('y',), expert=expert),
        ]
        with pytest.raises(RegistryError, match='Duplicate expert name'):
            ExpertRegistry(descriptors)

    def test_fallback_name_must_be_unique(self):
        expert = AsyncMock()
        with pytest.raises(RegistryError):
            ExpertRegistry(
                [ExpertDescriptor(name='general-expert', patterns=('x',), expert=expert)],
                fallback=ExpertDescriptor(name='general-expert', patterns=(), expert=expert),
            )

    def test_table_with_unknown_expert(self):
        with pytest.raises(RegistryError) as exc_info:
            ExpertRegistry.from_table({'a': AsyncMock()}, table=(('a', ('x',)), ('b', ('y',))), fallback_name=None)

        assert exc_info.value.context['missing'] == ['b']

    def test_registry_without_fallback(self):
        registry = ExpertRegistry.from_table({'a': AsyncMock()}, table=(('a', ('x',)),), fallback_name=None)

        assert registry.fallback is None
        assert registry.names == ['a']


class TestSectorCatalogue:
    """Test sector configuration coverage."""

    def test_config_keys_match(self):
        for key, config in SECTOR_CONFIGS.items():
            assert config.key == key
            assert config.key_metrics
            assert config.typical_exit_multiple > 0

    def test_specialists_and_templates_cover_catalogue(self):
        covered = set(SPECIALIST_KEYS) | {t.name for t in SECTOR_TEMPLATES}
        assert covered == set(SECTOR_CONFIGS)
        assert not set(SPECIALIST_KEYS) & {t.name for t in SECTOR_TEMPLATES}
