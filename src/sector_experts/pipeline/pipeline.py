"""
Sector expert pipeline facade.

Routes a deal to its sector expert and runs it:
1. Classify the declared sector against the ordered pattern table
2. Run the selected expert (prompt, model call, validation, capping,
   normalization)
3. Return the ExpertResult

The pipeline keeps no state between calls. Callers that want several experts
on the same deal can gather run_expert() calls; each failure stays in its own
result.
"""

from __future__ import annotations

from ..clients.openai_client import OpenAIClient
from ..errors import RegistryError
from ..experts.registry import ExpertDescriptor, ExpertRegistry, build_registry
from ..logging import get_logger, logging_context
from ..models import EnrichedContext
from .classifier import SectorRouter
from .runner import ExpertResult

logger = get_logger(__name__)


class SectorExpertPipeline:
    """
    Entry point for sector analysis of a deal.

    Usage:
        pipeline = SectorExpertPipeline.from_env()
        result = await pipeline.analyze(context)
        await pipeline.close()
    """

    def __init__(
        self,
        registry: ExpertRegistry,
        client: OpenAIClient | None = None,
        use_fallback: bool = True,
    ):
        """
        Initialize the pipeline.

        Args:
            registry: Experts in tie-break order, plus the generalist
            client: Client to close on close(), if the pipeline owns it
            use_fallback: Route unmatched sectors to the generalist
        """
        self.registry = registry
        self.client = client
        self.router = SectorRouter(registry, use_fallback=use_fallback)

    @classmethod
    def from_env(cls, use_fallback: bool = True) -> SectorExpertPipeline:
        """
        Create a pipeline with every expert, from environment variables.

        Expects:
            OPENAI_API_KEY: OpenAI API key
            OPENAI_CHAT_MODEL / OPENAI_COMPLEX_MODEL: Optional model overrides
            EXPERT_TEMPERATURE / EXPERT_TIMEOUT_SECONDS: Optional expert settings

        Returns:
            Configured SectorExpertPipeline
        """
        client = OpenAIClient()
        return cls(build_registry(client), client=client, use_fallback=use_fallback)

    async def close(self) -> None:
        """Close the model client if the pipeline owns one."""
        if self.client is not None:
            await self.client.close()

    def select_expert(self, sector: str | None) -> ExpertDescriptor | None:
        """Expert that would analyze a deal with this declared sector."""
        return self.router.route(sector)

    def select_experts(self, sector: str | None) -> list[ExpertDescriptor]:
        """Every expert whose patterns match the declared sector."""
        return self.router.route_all(sector)

    async def analyze(
        self,
        context: EnrichedContext,
        analysis_id: str | None = None,
    ) -> ExpertResult | None:
        """
        Route the deal to its sector expert and run it.

        Args:
            context: Deal and enrichment data
            analysis_id: Optional identifier added to every log entry

        Returns:
            The expert's result, or None when no expert handles the sector
            (only possible with fallback disabled)
        """
        with logging_context(deal_id=context.deal.id, analysis_id=analysis_id):
            descriptor = self.select_expert(context.deal.sector)
            if descriptor is None:
                logger.info('sector_unhandled', declared_sector=context.deal.sector)
                return None
            return await descriptor.expert.analyze(context)

    async def run_expert(
        self,
        name: str,
        context: EnrichedContext,
        analysis_id: str | None = None,
    ) -> ExpertResult:
        """
        Run a named expert regardless of the declared sector.

        Raises:
            RegistryError: If no expert has this name
        """
        descriptor = self.registry.get(name)
        if descriptor is None:
            raise RegistryError(
                f'Unknown sector expert: {name}',
                context={'known': self.registry.names},
            )
        with logging_context(deal_id=context.deal.id, analysis_id=analysis_id):
            return await descriptor.expert.analyze(context)
