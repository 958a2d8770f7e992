"""
Native sector experts.

Each specialist shares the specialist schema and execution; what differs is
its sector configuration and the focus areas it is told to evaluate.
"""

from ..clients.openai_client import CompletionClient
from ..pipeline.runner import SpecialistExpert
from . import sectors

SPECIALIST_FOCUS: dict[str, tuple[str, ...]] = {
    'saas-expert': (
        'Revenue quality: recurring share, contract length, services mix',
        'Cohort retention and expansion',
        'Sales efficiency: CAC payback, magic number, burn multiple',
    ),
    'legaltech-expert': (
        'Buyer: law firms, corporate legal departments or consumers',
        'Workflow depth and switching costs',
        'Exposure to unauthorized practice of law rules',
    ),
    'hrtech-expert': (
        'Position in the HR stack (system of record vs point solution)',
        'Revenue sensitivity to headcount changes',
        'Payroll and benefits compliance footprint',
    ),
    'marketplace-expert': (
        'Which side is constrained and how liquidity is built',
        'Take rate sustainability and disintermediation risk',
        'Cohort GMV and repeat behavior',
    ),
    'fintech-expert': (
        'Licensing model: own license, partner bank or agent',
        'Revenue mix: interchange, interest, subscription',
        'Credit and fraud loss management',
    ),
    'ai-expert': (
        'Model approach: API wrapper, RAG, fine-tuned or custom architecture',
        'Dependency on third-party model APIs',
        'Inference cost structure and margin at scale',
        'Team ML depth and data flywheel',
    ),
    'proptech-expert': (
        'Software vs balance sheet exposure',
        'Sensitivity to transaction volumes and interest rates',
        'Adoption by property managers, brokers or builders',
    ),
    'edtech-expert': (
        'Payer: learner, employer or institution',
        'Learning outcomes and completion',
        'Procurement cycles for institutional buyers',
    ),
    'foodtech-expert': (
        'Gross margin at current and target scale',
        'Production scale-up capital needs',
        'Retail or delivery channel economics',
    ),
    'mobility-expert': (
        'Per-trip or per-shipment contribution margin',
        'Asset ownership and utilization',
        'Labor classification and city permit exposure',
    ),
    'cybersecurity-expert': (
        'Category: endpoint, cloud, identity, application or network security',
        'Threat of platform vendors bundling the capability',
        'Certifications and compliance that unlock buyers',
    ),
    'general-expert': (
        'Closest established sector and the benchmarks borrowed from it',
        'Business model clarity and evidence of demand',
    ),
}

SPECIALIST_KEYS: tuple[str, ...] = tuple(SPECIALIST_FOCUS)


def build_specialists(
    client: CompletionClient,
    temperature: float | None = None,
    timeout_seconds: float | None = None,
) -> dict[str, SpecialistExpert]:
    """Instantiate every native expert against one completion client."""
    return {
        key: SpecialistExpert(
            name=key,
            config=sectors.SECTOR_CONFIGS[key],
            client=client,
            focus_areas=focus,
            temperature=temperature,
            timeout_seconds=timeout_seconds,
        )
        for key, focus in SPECIALIST_FOCUS.items()
    }
