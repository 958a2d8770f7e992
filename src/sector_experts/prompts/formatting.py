"""
Shared prompt blocks built from an EnrichedContext.

Every sector prompt embeds the same deal, prior-analysis, funding database
and fact store sections; only the instructions and schema around them
differ per expert family.
"""

import json
from dataclasses import dataclass
from typing import Any

from ..models import Deal, EnrichedContext, FundingDbContext, SectorConfig

NO_FUNDING_DATA = 'No funding database data available for cross-reference.'

# Prior-tier results are useful context but can be huge
_MAX_PREVIOUS_RESULT_CHARS = 2000
_MAX_EXTRACTED_DATA_CHARS = 3000
_MAX_SIMILAR_DEALS = 10
_MAX_COMPETITORS = 5


@dataclass(frozen=True)
class PromptPair:
    """System and user prompt for one model call."""

    system: str
    user: str


def format_eur_millions(amount: float | None, missing: str = 'Not specified') -> str:
    """Render an EUR amount as e.g. '4.5M€'."""
    if amount is None:
        return missing
    return f'{amount / 1_000_000:.1f}M€'


def format_deal_block(deal: Deal) -> str:
    stage = deal.stage.label if deal.stage else 'Seed'
    growth = f'{deal.growth_rate:g}% YoY' if deal.growth_rate is not None else 'Not specified'
    lines = [
        '## DEAL TO ANALYZE',
        '',
        f'**Company:** {deal.company_name}',
        f'**Declared sector:** {deal.sector or "Not specified"}',
        f'**Stage:** {stage}',
        f'**Geography:** {deal.geography or "Not specified"}',
        f'**Requested pre-money valuation:** {format_eur_millions(deal.valuation_pre)}',
        f'**Amount raised:** {format_eur_millions(deal.amount_requested)}',
        f'**Reported ARR:** {format_eur_millions(deal.arr)}',
        f'**Reported growth:** {growth}',
    ]
    return '\n'.join(lines)


def format_extracted_data(extracted: dict[str, Any] | None) -> str:
    if not extracted:
        return '## EXTRACTED DATA\n\nNo structured data was extracted from the documents.'
    body = json.dumps(extracted, indent=2, default=str)[:_MAX_EXTRACTED_DATA_CHARS]
    return f'## EXTRACTED DATA\n\n```json\n{body}\n```'


def format_previous_results(previous_results: dict[str, Any]) -> str:
    """
    Summarize prior-tier agent results.

    Only successful results are included: a failed agent's default payload
    would read as real findings to the model.
    """
    sections = []
    for agent_name, result in previous_results.items():
        if not isinstance(result, dict) or not result.get('success'):
            continue
        data = result.get('data')
        if not data:
            continue
        body = json.dumps(data, indent=2, default=str)[:_MAX_PREVIOUS_RESULT_CHARS]
        sections.append(f'### {agent_name}\n{body}')

    if not sections:
        return '## PRIOR ANALYSES\n\nNo prior analyses available.'
    return '## PRIOR ANALYSES\n\n' + '\n\n'.join(sections)


def format_funding_db(funding_db: FundingDbContext | None) -> str:
    if funding_db is None or funding_db.is_empty:
        return f'## FUNDING DATABASE\n\n{NO_FUNDING_DATA}'

    parts = ['## FUNDING DATABASE (cross-reference required)']

    if funding_db.similar_deals:
        parts.append(f'\n### Similar deals ({len(funding_db.similar_deals)} found)')
        for d in funding_db.similar_deals[:_MAX_SIMILAR_DEALS]:
            amount = format_eur_millions(d.amount, missing='N/A')
            valuation = format_eur_millions(d.valuation, missing='N/A')
            parts.append(f'- **{d.name}**: {amount} @ {valuation} ({d.stage or "?"}) - {d.status or "?"}')

    if funding_db.valuation_benchmarks:
        parts.append('\n### Valuation benchmarks (recent deals, same sector/stage)')
        for key, value in funding_db.valuation_benchmarks.items():
            parts.append(f'- {key}: {value if value is not None else "N/A"}')

    if funding_db.competitors:
        parts.append('\n### Potential competitors detected')
        for c in funding_db.competitors[:_MAX_COMPETITORS]:
            raised = f'{format_eur_millions(c.total_funding)} raised' if c.total_funding else ''
            last_round = f'(last round: {c.last_round})' if c.last_round else ''
            parts.append(f'- **{c.name}**: {raised} {last_round}'.rstrip())
        parts.append(
            '\nCheck whether these competitors are mentioned in the deck. '
            'Competitors missing from the deck are a potential red flag.'
        )

    if funding_db.sector_trend:
        parts.append(f'\n### Sector funding trend\n{funding_db.sector_trend}')

    return '\n'.join(parts)


def format_fact_store(fact_store: str | None) -> str:
    if not fact_store:
        return ''
    return (
        '## VERIFIED DATA (Fact Store)\n\n'
        'The facts below were extracted and verified from the deal documents. '
        'Base your analysis on them and flag any important fact that is missing.\n\n'
        f'{fact_store}'
    )


def format_bullets(items: tuple[str, ...] | list[str], empty: str = '- None listed') -> str:
    if not items:
        return empty
    return '\n'.join(f'- {item}' for item in items)


def format_completeness_rules() -> str:
    return (
        '## DATA COMPLETENESS RULES\n\n'
        '- Report a dataCompleteness level: "complete", "partial" or "minimal".\n'
        '- minimal (under 30% of key metrics available): sectorScore must not exceed 50.\n'
        '- partial (30-70% available): sectorScore must not exceed 70.\n'
        '- Never invent a metric value. Use null and list it under missingCritical.'
    )


def format_context_blocks(context: EnrichedContext, sector: SectorConfig) -> str:
    """All deal-dependent blocks of a user prompt, in a fixed order."""
    blocks = [
        format_deal_block(context.deal),
        format_fact_store(context.fact_store),
        format_extracted_data(context.extracted_data),
        format_previous_results(context.previous_results),
        format_funding_db(context.funding_db),
        f'## KEY {sector.name.upper()} METRICS TO EVALUATE\n\n{format_bullets(sector.key_metrics)}',
    ]
    if context.document_text:
        blocks.append(f'## DOCUMENT TEXT\n\n{context.document_text}')
    return '\n\n---\n\n'.join(b for b in blocks if b)
