"""
Deal and EnrichedContext models.

Both are built by the upstream orchestrator and are read-only here: the
models are frozen so the same context can be handed to several experts
running concurrently.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FundingStage(str, Enum):
    """Funding round the deal is raising."""

    PRE_SEED = 'pre_seed'
    SEED = 'seed'
    SERIES_A = 'series_a'
    SERIES_B = 'series_b'
    SERIES_C = 'series_c'
    GROWTH = 'growth'

    @property
    def label(self) -> str:
        """Human-readable stage label, e.g. 'Series A'."""
        return self.value.replace('_', ' ').title().replace('Pre Seed', 'Pre-Seed')


class Deal(BaseModel):
    """The startup investment opportunity under analysis."""

    model_config = ConfigDict(frozen=True)

    id: str | None = Field(default=None, description='Upstream deal identifier')
    company_name: str = Field(..., description='Company name')
    sector: str | None = Field(
        default=None, description='Declared sector, free text (e.g. "LegalTech / CLM")'
    )
    stage: FundingStage | None = Field(default=None, description='Funding stage')
    geography: str | None = Field(default=None, description='Primary geography')
    valuation_pre: float | None = Field(
        default=None, ge=0, description='Requested pre-money valuation (EUR)'
    )
    amount_requested: float | None = Field(
        default=None, ge=0, description='Amount being raised (EUR)'
    )
    arr: float | None = Field(default=None, description='Reported annual recurring revenue (EUR)')
    growth_rate: float | None = Field(
        default=None, description='Reported year-over-year growth rate, in percent'
    )


class ComparableDeal(BaseModel):
    """A similar deal found in the funding database."""

    model_config = ConfigDict(frozen=True)

    name: str
    amount: float | None = None
    valuation: float | None = None
    stage: str | None = None
    status: str | None = None


class Competitor(BaseModel):
    """A competitor detected in the funding database."""

    model_config = ConfigDict(frozen=True)

    name: str
    total_funding: float | None = None
    last_round: str | None = None
    status: str | None = None


class FundingDbContext(BaseModel):
    """Cross-reference data from the external funding database."""

    model_config = ConfigDict(frozen=True)

    similar_deals: list[ComparableDeal] = Field(default_factory=list)
    competitors: list[Competitor] = Field(default_factory=list)
    valuation_benchmarks: dict[str, Any] | None = Field(
        default=None, description='Sector valuation benchmarks (free-form, e.g. median multiples)'
    )
    sector_trend: str | None = Field(default=None, description='Short sector funding trend note')

    @property
    def is_empty(self) -> bool:
        """True if the lookup returned nothing usable."""
        return (
            not self.similar_deals
            and not self.competitors
            and not self.valuation_benchmarks
            and not self.sector_trend
        )


class EnrichedContext(BaseModel):
    """
    Everything an expert may read while analyzing a deal.

    previous_results maps agent name to that agent's result payload
    (a dict with at least 'success' and 'data').
    """

    model_config = ConfigDict(frozen=True)

    deal: Deal
    document_text: str | None = Field(default=None, description='Text extracted from the deck')
    extracted_data: dict[str, Any] | None = Field(
        default=None, description='Structured data extracted from documents'
    )
    previous_results: dict[str, Any] = Field(
        default_factory=dict, description='Prior-tier agent results keyed by agent name'
    )
    funding_db: FundingDbContext | None = Field(default=None)
    fact_store: str | None = Field(default=None, description='Pre-formatted verified facts')
