"""
Expert invocation.

Every sector expert runs the same sequential pipeline:
1. Build the prompt from deal + context
2. Call the model (bounded by the expert timeout)
3. Extract the first JSON object from the response
4. Validate it against the expert family's schema (non-fatal)
5. Normalize to the canonical result
6. Cap the score by data completeness

SectorExpert.analyze() owns failure containment: whatever goes wrong in
steps 1-6 comes back as a failed ExpertResult carrying the sector's default
data, never as an exception. Task cancellation still propagates.

Two variants implement the steps:
- SpecialistExpert: native experts with their own prompt and schema
- TemplateExpertAdapter: wraps a SectorPromptTemplate, which only knows how
  to build a prompt, and supplies the generic execution
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from ..clients.openai_client import CompletionClient, CompletionResult
from ..config import config as app_config
from ..errors import ModelTimeoutError, SectorExpertError, UnparseableResponseError
from ..logging import PipelineTimer, get_logger, logging_context
from ..models import EnrichedContext, NormalizedResult, SectorConfig
from ..prompts import (
    PromptPair,
    SectorExpertOutput,
    SpecialistOutput,
    build_sector_expert_prompt,
    build_specialist_prompt,
)
from ..utils import extract_first_json
from .capper import apply_score_cap, assess_completeness
from .normalizer import (
    build_default_result,
    metric_values,
    normalize_sector_output,
    normalize_specialist_output,
    reported_completeness,
)
from .validator import FieldViolation, ValidationOutcome, validate_output

logger = get_logger(__name__)

EXPERT_COMPLEXITY = 'complex'

# Cap on violations copied into a single log event
_MAX_LOGGED_VIOLATIONS = 10


@dataclass
class ExpertResult:
    """Outcome of one expert invocation. data is always a full NormalizedResult."""

    expert_name: str
    success: bool
    execution_time_ms: int
    cost: float
    data: NormalizedResult
    error: str | None = None

    # Annotations
    schema_valid: bool | None = None
    violations: list[FieldViolation] = field(default_factory=list)
    model: str | None = None
    stage_timings: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dict for the result consumer."""
        return {
            'agentName': self.expert_name,
            'success': self.success,
            'executionTimeMs': self.execution_time_ms,
            'cost': self.cost,
            'data': self.data.to_dict(),
            'error': self.error,
            'schemaValid': self.schema_valid,
            'violations': [v.to_dict() for v in self.violations],
            'model': self.model,
            'stageTimings': self.stage_timings,
        }


@dataclass
class ExpertRun:
    """What a successful execution hands back to SectorExpert.analyze()."""

    data: NormalizedResult
    completion: CompletionResult
    outcome: ValidationOutcome


class SectorExpert(ABC):
    """
    Common contract for every sector expert.

    Subclasses implement _execute(); analyze() wraps it with logging,
    timing and failure containment.
    """

    def __init__(
        self,
        name: str,
        config: SectorConfig,
        client: CompletionClient,
        temperature: float | None = None,
        timeout_seconds: float | None = None,
    ):
        """
        Initialize the expert.

        Args:
            name: Unique expert name (e.g. 'saas-expert')
            config: Sector knowledge for this expert
            client: Model completion client
            temperature: Sampling temperature (defaults to EXPERT_TEMPERATURE)
            timeout_seconds: Model call timeout (defaults to EXPERT_TIMEOUT_SECONDS)
        """
        self.name = name
        self.config = config
        self.client = client
        self.temperature = (
            temperature if temperature is not None else app_config.EXPERT_TEMPERATURE
        )
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else app_config.EXPERT_TIMEOUT_SECONDS
        )

    def __repr__(self) -> str:
        return f'{type(self).__name__}(name={self.name!r})'

    @abstractmethod
    async def _execute(self, context: EnrichedContext, timer: PipelineTimer) -> ExpertRun:
        """Run the expert. May raise; analyze() contains the failure."""

    def default_result(self) -> NormalizedResult:
        """Result carried by a failed invocation."""
        return build_default_result(self.config)

    async def analyze(self, context: EnrichedContext) -> ExpertResult:
        """
        Analyze a deal.

        Args:
            context: Deal and enrichment data, shared read-only

        Returns:
            ExpertResult. On failure success is False, cost is 0, error holds
            the message and data holds the sector's default result.
        """
        timer = PipelineTimer()

        with logging_context(deal_id=context.deal.id, expert=self.name):
            logger.info(
                'expert_started',
                company=context.deal.company_name,
                sector=context.deal.sector,
            )

            try:
                run = await self._execute(context, timer)
            except Exception as e:
                message = e.message if isinstance(e, SectorExpertError) else str(e)
                logger.error(
                    'expert_failed',
                    error=message or type(e).__name__,
                    error_type=type(e).__name__,
                    **timer.summary(),
                )
                return ExpertResult(
                    expert_name=self.name,
                    success=False,
                    execution_time_ms=int(timer.total_ms),
                    cost=0.0,
                    data=self.default_result(),
                    error=message or type(e).__name__,
                    stage_timings=timer.stage_timings(),
                )

            logger.info(
                'expert_complete',
                sector_score=run.data.sector_score,
                schema_valid=run.outcome.schema_valid,
                cost=round(run.completion.cost, 6),
                **timer.summary(),
            )

            return ExpertResult(
                expert_name=self.name,
                success=True,
                execution_time_ms=int(timer.total_ms),
                cost=run.completion.cost,
                data=run.data,
                schema_valid=run.outcome.schema_valid,
                violations=list(run.outcome.violations),
                model=run.completion.model,
                stage_timings=timer.stage_timings(),
            )

    # =========================================================================
    # Shared steps
    # =========================================================================

    async def _request_json(
        self,
        prompt: PromptPair,
        timer: PipelineTimer,
    ) -> tuple[dict[str, Any], CompletionResult]:
        """Call the model and extract the first JSON object of its answer."""
        with timer.stage('model_call'):
            try:
                completion = await asyncio.wait_for(
                    self.client.complete(
                        prompt.user,
                        system_prompt=prompt.system,
                        complexity=EXPERT_COMPLEXITY,
                        temperature=self.temperature,
                    ),
                    timeout=self.timeout_seconds,
                )
            except asyncio.TimeoutError as e:
                raise ModelTimeoutError(
                    f'Model call timed out after {self.timeout_seconds:g}s',
                    context={'expert': self.name},
                ) from e

        with timer.stage('parse'):
            parsed = extract_first_json(completion.content)

        if parsed is None:
            raise UnparseableResponseError(
                'No JSON object found in model response',
                context={'expert': self.name, 'response_preview': completion.content[:200]},
            )
        return parsed, completion

    def _validate(
        self,
        schema: type[BaseModel],
        parsed: dict[str, Any],
        timer: PipelineTimer,
    ) -> ValidationOutcome:
        with timer.stage('validate'):
            outcome = validate_output(schema, parsed)

        if not outcome.schema_valid:
            logger.warning(
                'expert_schema_validation_failed',
                violation_count=len(outcome.violations),
                violations=[v.to_dict() for v in outcome.violations[:_MAX_LOGGED_VIOLATIONS]],
            )
        return outcome

    def _cap(
        self,
        result: NormalizedResult,
        output: dict[str, Any],
        metrics_key: str,
        value_key: str,
    ) -> NormalizedResult:
        """Cap scores by data completeness, the same way for every variant."""
        level, limitations = reported_completeness(output)
        assessment = assess_completeness(
            metric_values(output, metrics_key, value_key),
            explicit_level=level,
        )
        capped = apply_score_cap(result, assessment, extra_limitations=limitations)

        if capped.data_completeness and capped.data_completeness.score_capped:
            logger.info(
                'expert_score_capped',
                tier=assessment.tier.value,
                source=assessment.source,
                raw_score=capped.data_completeness.raw_score,
                capped_score=capped.data_completeness.capped_score,
            )
        return capped


# =============================================================================
# Native Experts
# =============================================================================


class SpecialistExpert(SectorExpert):
    """
    Native sector expert with its own prompt and output schema.

    focus_areas lists what this specialist must evaluate beyond the generic
    sector knowledge (e.g. API dependency for AI, take rate for marketplaces).
    """

    output_schema: type[BaseModel] = SpecialistOutput

    def __init__(
        self,
        name: str,
        config: SectorConfig,
        client: CompletionClient,
        focus_areas: tuple[str, ...] = (),
        temperature: float | None = None,
        timeout_seconds: float | None = None,
    ):
        super().__init__(name, config, client, temperature, timeout_seconds)
        self.focus_areas = focus_areas

    def build_prompt(self, context: EnrichedContext) -> PromptPair:
        return build_specialist_prompt(context, self.config, self.focus_areas)

    async def _execute(self, context: EnrichedContext, timer: PipelineTimer) -> ExpertRun:
        with timer.stage('build_prompt'):
            prompt = self.build_prompt(context)

        parsed, completion = await self._request_json(prompt, timer)
        outcome = self._validate(self.output_schema, parsed, timer)

        with timer.stage('normalize'):
            normalized = normalize_specialist_output(outcome.data, self.config)
            normalized = self._cap(normalized, outcome.data, 'primaryMetrics', 'dealValue')

        return ExpertRun(data=normalized, completion=completion, outcome=outcome)


# =============================================================================
# Template-only Experts
# =============================================================================


@dataclass(frozen=True)
class SectorPromptTemplate:
    """
    Prompt-only sector expert definition.

    Knows how to build its prompt and which schema its output follows, and
    nothing about execution. Run it through TemplateExpertAdapter.
    """

    name: str
    config: SectorConfig
    output_schema: type[BaseModel] = SectorExpertOutput

    def build_prompt(self, context: EnrichedContext) -> PromptPair:
        return build_sector_expert_prompt(context, self.config)


class TemplateExpertAdapter(SectorExpert):
    """Supplies the generic execution for a SectorPromptTemplate."""

    def __init__(
        self,
        template: SectorPromptTemplate,
        client: CompletionClient,
        temperature: float | None = None,
        timeout_seconds: float | None = None,
    ):
        super().__init__(template.name, template.config, client, temperature, timeout_seconds)
        self.template = template

    async def _execute(self, context: EnrichedContext, timer: PipelineTimer) -> ExpertRun:
        with timer.stage('build_prompt'):
            prompt = self.template.build_prompt(context)

        parsed, completion = await self._request_json(prompt, timer)
        outcome = self._validate(self.template.output_schema, parsed, timer)

        with timer.stage('normalize'):
            normalized = normalize_sector_output(
                outcome.data,
                sector_name=self.config.name,
                default_regulations=self.config.key_regulations,
                default_exit_multiple=self.config.typical_exit_multiple,
            )
            normalized = self._cap(normalized, outcome.data, 'metricsAnalysis', 'metricValue')

        return ExpertRun(data=normalized, completion=completion, outcome=outcome)
