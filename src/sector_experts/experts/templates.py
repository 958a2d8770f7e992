"""
Template-only sector experts.

These sectors are defined by configuration alone and run through
TemplateExpertAdapter with the generic schema.
"""

from ..clients.openai_client import CompletionClient
from ..pipeline.runner import SectorPromptTemplate, TemplateExpertAdapter
from . import sectors

SECTOR_TEMPLATES: tuple[SectorPromptTemplate, ...] = tuple(
    SectorPromptTemplate(name=config.key, config=config)
    for config in (
        sectors.BIOTECH,
        sectors.HEALTHTECH,
        sectors.DEEPTECH,
        sectors.CLIMATE,
        sectors.HARDWARE,
        sectors.SPACETECH,
        sectors.GAMING,
        sectors.CONSUMER,
        sectors.CREATOR,
    )
)


def build_template_experts(
    client: CompletionClient,
    temperature: float | None = None,
    timeout_seconds: float | None = None,
) -> dict[str, TemplateExpertAdapter]:
    """Wrap every sector template in an adapter bound to one completion client."""
    return {
        template.name: TemplateExpertAdapter(
            template,
            client,
            temperature=temperature,
            timeout_seconds=timeout_seconds,
        )
        for template in SECTOR_TEMPLATES
    }
