"""
Pytest configuration and shared fixtures.

Key fixtures:
- sample_deal / sample_context: a seed-stage LegalTech deal with enrichment
- generic_payload: a valid SectorExpertOutput response (camelCase)
- specialist_payload: a valid SpecialistOutput response (camelCase)
- make_client: builds an AsyncMock completion client answering with given text

No fixture touches the network. The openai_api_key fixture skips live tests
when OPENAI_API_KEY is not set.
"""

import json
import os
import sys
from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

# Load environment variables
from dotenv import load_dotenv

env_file = Path(__file__).parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)

from sector_experts.clients.openai_client import CompletionResult, TokenUsage
from sector_experts.models import (
    ComparableDeal,
    Competitor,
    Deal,
    EnrichedContext,
    FundingDbContext,
    FundingStage,
)


@pytest.fixture
def openai_api_key() -> str:
    """Get OpenAI API key from environment."""
    key = os.getenv('OPENAI_API_KEY')
    if not key:
        pytest.skip('OPENAI_API_KEY not set')
    return key


@pytest.fixture
def sample_deal() -> Deal:
    """Seed-stage LegalTech deal."""
    return Deal(
        id='deal_001',
        company_name='Clausely',
        sector='LegalTech / Contract Management',
        stage=FundingStage.SEED,
        geography='France',
        valuation_pre=8_000_000,
        amount_requested=2_000_000,
        arr=600_000,
        growth_rate=180,
    )


@pytest.fixture
def sample_funding_db() -> FundingDbContext:
    """Funding database lookup with comparables and competitors."""
    return FundingDbContext(
        similar_deals=[
            ComparableDeal(name='Contractify', amount=3_000_000, valuation=12_000_000, stage='Seed', status='active'),
            ComparableDeal(name='LexFlow', amount=1_500_000, valuation=6_000_000, stage='Seed', status='acquired'),
        ],
        competitors=[
            Competitor(name='Ironclad', total_funding=330_000_000, last_round='Series E'),
        ],
        valuation_benchmarks={'medianArrMultiple': 14, 'medianPreMoney': 7_500_000},
        sector_trend='LegalTech seed volume up 12% year over year',
    )


@pytest.fixture
def sample_context(sample_deal: Deal, sample_funding_db: FundingDbContext) -> EnrichedContext:
    """Enriched context with prior results and funding data."""
    return EnrichedContext(
        deal=sample_deal,
        document_text='Clausely automates contract review for mid-market legal teams.',
        extracted_data={'arr': 600_000, 'customers': 42},
        previous_results={
            'financial-auditor': {'success': True, 'data': {'score': 72, 'verdict': 'healthy'}},
            'team-investigator': {'success': False, 'data': {'score': 0}},
        },
        funding_db=sample_funding_db,
        fact_store='- ARR: 600k EUR (deck p.4)\n- Customers: 42 (deck p.6)',
    )


@pytest.fixture
def bare_context() -> EnrichedContext:
    """Context with nothing but the deal."""
    return EnrichedContext(deal=Deal(company_name='Bare Co', sector='Quantum computing'))


@pytest.fixture
def generic_payload() -> dict[str, Any]:
    """Response matching the generic sector expert schema."""
    return {
        'sectorFit': {
            'verdict': 'strong',
            'score': 82,
            'reasoning': 'Strong fit with hardware-enabled SaaS patterns.',
            'sectorMaturity': 'growth',
            'timingAssessment': 'early_mover',
        },
        'metricsAnalysis': [
            {
                'metricName': 'Hardware gross margin',
                'metricValue': 42,
                'unit': '%',
                'benchmark': {'p25': 25, 'median': 35, 'p75': 45, 'topDecile': 55},
                'percentile': 68,
                'assessment': 'above_average',
                'sectorContext': 'Above median for IoT devices.',
            },
            {
                'metricName': 'Recurring revenue share',
                'metricValue': 30,
                'benchmark': {'p25': 10, 'median': 20},
                'assessment': 'exceptional',
            },
            {
                'metricName': 'Manufacturing yield',
                'metricValue': None,
                'assessment': 'critical',
            },
        ],
        'sectorRedFlags': [
            {
                'flag': 'Single contract manufacturer',
                'severity': 'high',
                'evidence': 'Deck p.9',
                'sectorThreshold': 'At least two qualified CMs before Series A',
            }
        ],
        'sectorOpportunities': [
            {
                'opportunity': 'Attach software subscriptions',
                'potential': 'high',
                'sectorContext': 'Installed base of 5k devices',
            }
        ],
        'sectorDynamics': {
            'competitionIntensity': 'moderate',
            'consolidationTrend': 'winner_take_all',
            'barrierToEntry': 'very_high',
            'exitLandscape': {
                'typicalMultiple': {'low': 2, 'median': 4.5, 'high': 8},
                'recentExits': [
                    {'company': 'Nest', 'acquirer': 'Google', 'multiple': 10, 'year': 2014},
                    {'company': 'Ring'},
                ],
            },
            'regulatoryRisk': {
                'level': 'high',
                'keyRegulations': ['FCC', 'CE Mark'],
                'upcomingChanges': ['EU Cyber Resilience Act'],
            },
        },
        'mustAskQuestions': [
            {
                'question': 'What is your current manufacturing yield?',
                'category': 'technical',
                'priority': 'critical',
                'goodAnswer': 'Above 95%',
                'redFlagAnswer': 'We do not track it',
            }
        ],
        'executiveSummary': {
            'verdict': 'Solid hardware play with a credible recurring revenue path.',
            'sectorScore': 78,
            'topStrengths': ['Margin above median', 'Recurring revenue'],
            'topConcerns': ['CM concentration'],
        },
        'dataCompleteness': {
            'level': 'complete',
            'availableDataPoints': 2,
            'expectedDataPoints': 3,
        },
    }


@pytest.fixture
def specialist_payload() -> dict[str, Any]:
    """Response matching the native specialist schema."""
    return {
        'sectorConfidence': 92,
        'subSector': 'Contract lifecycle management',
        'primaryMetrics': [
            {
                'metricName': 'ARR growth YoY',
                'dealValue': 180,
                'benchmark': {'p25': 60, 'median': 100, 'p75': 150, 'topDecile': 250},
                'percentilePosition': 80,
                'assessment': 'above_average',
                'insight': 'Fast growth for seed LegalTech.',
            },
            {
                'metricName': 'Net Revenue Retention',
                'dealValue': 115,
                'benchmark': {'p25': 95, 'median': 105, 'p75': 120},
                'assessment': 'average',
            },
            {
                'metricName': 'Sales cycle length (months)',
                'dealValue': 4,
                'assessment': 'above_average',
            },
        ],
        'redFlags': [
            {
                'flag': 'UPL exposure',
                'severity': 'major',
                'evidence': 'Product drafts clauses for consumers',
                'impact': 'Regulatory action in several states',
                'questionToAsk': 'Who reviews generated clauses?',
            }
        ],
        'greenFlags': [
            {
                'flag': 'Embedded in CLM workflow',
                'strength': 'strong',
                'evidence': '42 customers use it daily',
                'implication': 'High switching costs',
            }
        ],
        'sectorQuestions': [
            {
                'question': 'How do you handle attorney-client privilege?',
                'category': 'regulatory',
                'priority': 'must_ask',
                'greenFlagAnswer': 'Tenant-isolated storage, no training on client data',
                'redFlagAnswer': 'Data is shared with the model provider',
            }
        ],
        'sectorScore': 74,
        'scoreBreakdown': {
            'metricsVsBenchmarks': 20,
            'unitEconomics': 18,
            'competitivePosition': 18,
            'sectorTiming': 18,
        },
        'executiveSummary': 'Promising CLM wedge with manageable regulatory risk.',
    }


def completion(content: str, cost: float = 0.012, model: str = 'gpt-4.1') -> CompletionResult:
    """Build a CompletionResult as the client would return it."""
    return CompletionResult(
        content=content,
        model=model,
        usage=TokenUsage(input_tokens=1200, output_tokens=800),
        cost=cost,
    )


@pytest.fixture
def make_client() -> Callable[..., AsyncMock]:
    """
    Factory for mock completion clients.

    make_client(payload) answers with the payload as JSON,
    make_client(text='...') answers with raw text,
    make_client(error=Exception(...)) raises.
    """

    def _make(
        payload: dict[str, Any] | None = None,
        text: str | None = None,
        error: Exception | None = None,
        cost: float = 0.012,
    ) -> AsyncMock:
        client = AsyncMock()
        if error is not None:
            client.complete.side_effect = error
        else:
            content = text if text is not None else json.dumps(payload or {})
            client.complete.return_value = completion(content, cost=cost)
        return client

    return _make
