#!/usr/bin/env python3
"""
Example: Route a deal to its sector expert and print the normalized result.

This script demonstrates:
1. Showing which expert each declared sector routes to
2. Running the selected expert on an enriched deal context
3. Printing the canonical result as the UI would receive it

Prerequisites:
    - Set environment variables:
        OPENAI_API_KEY=your_key

Usage:
    python examples/analyze_deal.py
"""

import asyncio
import json
import os
import sys
from pathlib import Path
from uuid import uuid4

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from dotenv import load_dotenv

# Load environment variables
env_file = Path(__file__).parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)

from sector_experts import SectorExpertPipeline, configure_logging
from sector_experts.models import (
    ComparableDeal,
    Competitor,
    Deal,
    EnrichedContext,
    FundingDbContext,
    FundingStage,
)


SAMPLE_SECTORS = [
    'LegalTech / Contract Management',
    'B2B SaaS',
    'Real estate marketplace',
    'AI/ML',
    'Blockchain Infrastructure',
    'Artisanal cheese',
]

DECK_TEXT = """
Clausely automates first-pass contract review for mid-market legal teams.
ARR reached 600k EUR in October, up 180% year over year, across 42 customers.
Net revenue retention is 115%. Average sales cycle is four months.
The team is raising 2M EUR at an 8M EUR pre-money valuation.
"""


def build_context() -> EnrichedContext:
    """Sample seed-stage LegalTech deal with funding database data."""
    deal = Deal(
        id=f"demo_{uuid4().hex[:8]}",
        company_name="Clausely",
        sector="LegalTech / Contract Management",
        stage=FundingStage.SEED,
        geography="France",
        valuation_pre=8_000_000,
        amount_requested=2_000_000,
        arr=600_000,
        growth_rate=180,
    )
    funding_db = FundingDbContext(
        similar_deals=[
            ComparableDeal(name="Contractify", amount=3_000_000, valuation=12_000_000, stage="Seed"),
            ComparableDeal(name="LexFlow", amount=1_500_000, valuation=6_000_000, stage="Seed"),
        ],
        competitors=[Competitor(name="Ironclad", total_funding=330_000_000, last_round="Series E")],
        sector_trend="LegalTech seed volume up 12% year over year",
    )
    return EnrichedContext(
        deal=deal,
        document_text=DECK_TEXT,
        extracted_data={"arr": 600_000, "customers": 42, "nrr": 115},
        funding_db=funding_db,
    )


async def main():
    """Run the example pipeline demonstration."""
    print("=" * 60)
    print("Sector Expert Pipeline Example")
    print("=" * 60)

    if not os.getenv('OPENAI_API_KEY'):
        print("ERROR: OPENAI_API_KEY not set")
        return

    configure_logging(json_output=False)
    pipeline = SectorExpertPipeline.from_env()

    try:
        # =====================================================================
        # Routing
        # =====================================================================
        print("\n" + "-" * 60)
        print("Routing table:")
        print("-" * 60)
        for sector in SAMPLE_SECTORS:
            descriptor = pipeline.select_expert(sector)
            print(f"  {sector:<35} -> {descriptor.name if descriptor else 'none'}")

        # =====================================================================
        # Analysis
        # =====================================================================
        context = build_context()
        print("\n" + "-" * 60)
        print(f"Analyzing {context.deal.company_name} ({context.deal.sector})...")
        print("-" * 60)

        result = await pipeline.analyze(context, analysis_id=uuid4().hex)
        if result is None:
            print("No expert handles this sector.")
            return

        print(f"\nResult:")
        print(f"  Expert: {result.expert_name}")
        print(f"  Success: {result.success}")
        print(f"  Sector score: {result.data.sector_score}")
        print(f"  Cost: ${result.cost:.4f}")
        print(f"  Execution time: {result.execution_time_ms}ms")
        if result.error:
            print(f"  Error: {result.error}")
        for limitation in result.data.limitations:
            print(f"  Limitation: {limitation}")

        print("\nFull result:")
        print(json.dumps(result.to_dict(), indent=2))

    finally:
        await pipeline.close()


if __name__ == '__main__':
    asyncio.run(main())
