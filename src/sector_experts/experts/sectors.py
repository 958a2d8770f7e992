"""
Sector configurations for every expert.

Values are stable, qualitative sector knowledge: what to measure, which
regulations apply, and the sector's usual shape. Live benchmarks and recent
exits come from the model's analysis, not from here.
"""

from ..models import (
    BarrierToEntry,
    CompetitionIntensity,
    ConsolidationTrend,
    MaturityLevel,
    RegulatoryComplexity,
    SectorConfig,
)

# =============================================================================
# Native Specialists
# =============================================================================

SAAS = SectorConfig(
    key='saas-expert',
    name='SaaS B2B',
    display_name='SaaS B2B Expert',
    description='You separate durable recurring revenue from growth bought with burn.',
    key_metrics=(
        'ARR growth YoY',
        'Net Revenue Retention',
        'Gross margin',
        'CAC payback (months)',
        'LTV/CAC',
        'Burn multiple',
        'Magic number',
    ),
    success_patterns=(
        'Net revenue retention above 120% driven by expansion',
        'Product-led motion with efficient sales assist',
        'Burn multiple under 1.5x while growing above 100%',
    ),
    sector_risks=(
        'Logo churn hidden behind expansion revenue',
        'Services revenue reported as ARR',
        'CAC payback above 24 months',
    ),
    score_dimensions=('growthQuality', 'unitEconomics', 'retention', 'gtmEfficiency'),
    typical_exit_multiple=8,
)

LEGALTECH = SectorConfig(
    key='legaltech-expert',
    name='LegalTech',
    display_name='LegalTech Expert',
    description='You know how slowly law firms and legal departments buy software.',
    key_metrics=(
        'ARR growth YoY',
        'Net Revenue Retention',
        'Seats per customer',
        'Sales cycle length (months)',
        'Gross margin',
    ),
    success_patterns=(
        'Embedded in daily legal workflows (CLM, matter management)',
        'Land with a practice group then expand firm-wide',
        'Defensible proprietary legal data',
    ),
    sector_risks=(
        'Unauthorized practice of law exposure',
        'Long sales cycles with partnership approval',
        'Generic LLM features commoditizing the product',
    ),
    regulatory_complexity=RegulatoryComplexity.HIGH,
    key_regulations=(
        'ABA Model Rules',
        'State Bar Regulations',
        'UPL Rules',
        'Attorney-Client Privilege',
    ),
    competition_intensity=CompetitionIntensity.HIGH,
    consolidation_trend=ConsolidationTrend.CONSOLIDATING,
    barrier_to_entry=BarrierToEntry.HIGH,
    typical_exit_multiple=5,
)

HRTECH = SectorConfig(
    key='hrtech-expert',
    name='HRTech',
    display_name='HRTech Expert',
    description='You evaluate software that sits on payroll, people data and compliance.',
    key_metrics=(
        'ARR growth YoY',
        'Revenue per employee served (PEPM)',
        'Net Revenue Retention',
        'Gross margin',
        'Implementation time (weeks)',
    ),
    success_patterns=(
        'System of record position (HRIS, payroll)',
        'Payments or benefits revenue on top of SaaS',
        'Multi-country compliance as a moat',
    ),
    sector_risks=(
        'Seat contraction in hiring downturns',
        'Payroll errors creating liability',
        'Suite vendors bundling the feature',
    ),
    key_regulations=('SOC 2', 'GDPR', 'CCPA', 'Payroll compliance'),
    competition_intensity=CompetitionIntensity.HIGH,
    consolidation_trend=ConsolidationTrend.CONSOLIDATING,
    typical_exit_multiple=6,
)

MARKETPLACE = SectorConfig(
    key='marketplace-expert',
    name='Marketplace',
    display_name='Marketplace Expert',
    description='You look for real liquidity and defensible network effects.',
    key_metrics=(
        'GMV growth YoY',
        'Take rate',
        'Buyer repeat rate',
        'Supply liquidity (match rate)',
        'Contribution margin per order',
    ),
    success_patterns=(
        'Liquidity in a dense local market before expansion',
        'Take rate sustained without disintermediation',
        'Cohort GMV growing year over year',
    ),
    sector_risks=(
        'Disintermediation after the first transaction',
        'Subsidized growth on one side of the market',
        'Low frequency use cases',
    ),
    competition_intensity=CompetitionIntensity.HIGH,
    consolidation_trend=ConsolidationTrend.CONSOLIDATING,
    barrier_to_entry=BarrierToEntry.HIGH,
    typical_exit_multiple=4,
)

FINTECH = SectorConfig(
    key='fintech-expert',
    name='Fintech',
    display_name='Fintech Expert',
    description='You read fintech through licensing, risk and the cost of capital.',
    key_metrics=(
        'Total payment volume / AUM growth',
        'Net take rate',
        'Loss rate',
        'CAC payback (months)',
        'Revenue per user',
    ),
    success_patterns=(
        'Own license or strong banking partner',
        'Revenue diversified beyond interchange',
        'Underwriting advantage proven through a cycle',
    ),
    sector_risks=(
        'Partner bank dependency',
        'Credit losses rising with growth',
        'Regulatory change on interchange or lending',
    ),
    regulatory_complexity=RegulatoryComplexity.VERY_HIGH,
    key_regulations=('AML/KYC', 'PSD2', 'Consumer Credit', 'GDPR'),
    competition_intensity=CompetitionIntensity.HIGH,
    consolidation_trend=ConsolidationTrend.CONSOLIDATING,
    barrier_to_entry=BarrierToEntry.HIGH,
    typical_exit_multiple=6,
)

AI = SectorConfig(
    key='ai-expert',
    name='AI/ML',
    display_name='AI/ML Expert',
    description='You distinguish real AI companies from API wrappers without a moat.',
    key_metrics=(
        'ARR growth YoY',
        'Gross margin after inference costs',
        'Cost per inference',
        'Proprietary dataset size',
        'Model accuracy vs benchmark',
    ),
    success_patterns=(
        'Data flywheel: the product improves with usage',
        'Fine-tuned or custom models on proprietary data',
        'Team with published ML research',
    ),
    sector_risks=(
        'Fully dependent on third-party model APIs',
        'Accuracy claims without evaluation methodology',
        'Margins squeezed by inference costs at scale',
    ),
    score_dimensions=('technicalDepth', 'moatStrength', 'unitEconomics', 'scalability'),
    key_regulations=('AI Act (EU)', 'GDPR', 'Data Privacy Laws'),
    upcoming_changes=('EU AI Act enforcement 2025', 'US AI executive orders'),
    competition_intensity=CompetitionIntensity.INTENSE,
    consolidation_trend=ConsolidationTrend.CONSOLIDATING,
    typical_exit_multiple=12,
)

PROPTECH = SectorConfig(
    key='proptech-expert',
    name='PropTech',
    display_name='PropTech Expert',
    description='You know real estate cycles and how slowly the industry adopts software.',
    key_metrics=(
        'ARR or transaction revenue growth',
        'Units / square meters under management',
        'Gross margin',
        'Customer concentration',
        'Sales cycle length (months)',
    ),
    success_patterns=(
        'Software margins rather than balance sheet exposure',
        'Workflow lock-in with property managers',
        'Resilience through interest rate cycles',
    ),
    sector_risks=(
        'Balance sheet risk disguised as technology',
        'Exposure to transaction volumes and rates',
        'Local regulation blocking the model',
    ),
    key_regulations=('Rent control laws', 'Real estate licensing', 'Zoning regulations'),
    competition_intensity=CompetitionIntensity.HIGH,
    consolidation_trend=ConsolidationTrend.CONSOLIDATING,
    typical_exit_multiple=4,
)

EDTECH = SectorConfig(
    key='edtech-expert',
    name='EdTech',
    display_name='EdTech Expert',
    description='You separate learning outcomes from engagement vanity metrics.',
    key_metrics=(
        'Revenue growth YoY',
        'Course completion rate',
        'Learner retention (M3)',
        'CAC payback (months)',
        'B2B share of revenue',
    ),
    success_patterns=(
        'Measurable learning outcomes',
        'B2B or institutional distribution',
        'Credentials recognized by employers',
    ),
    sector_risks=(
        'Post-pandemic demand normalization',
        'Long institutional procurement cycles',
        'Low completion and churn after the first term',
    ),
    key_regulations=('COPPA', 'FERPA', 'WCAG 2.1 AA'),
    competition_intensity=CompetitionIntensity.HIGH,
    consolidation_trend=ConsolidationTrend.CONSOLIDATING,
    typical_exit_multiple=5,
)

FOODTECH = SectorConfig(
    key='foodtech-expert',
    name='FoodTech',
    display_name='FoodTech Expert',
    description='You check that food margins survive scale, spoilage and retail listing fees.',
    key_metrics=(
        'Revenue growth YoY',
        'Gross margin',
        'Repeat purchase rate',
        'Velocity per store per week',
        'Contribution margin per order',
    ),
    success_patterns=(
        'Gross margin above 40% at scale',
        'Retail velocity that earns shelf space',
        'Cost-down roadmap for novel production',
    ),
    sector_risks=(
        'Capital-intensive production scale-up',
        'Negative unit economics in delivery models',
        'Food safety recalls',
    ),
    key_regulations=('FDA Food Safety', 'Labeling Requirements'),
    competition_intensity=CompetitionIntensity.HIGH,
    consolidation_trend=ConsolidationTrend.CONSOLIDATING,
    barrier_to_entry=BarrierToEntry.LOW,
    typical_exit_multiple=2.5,
)

MOBILITY = SectorConfig(
    key='mobility-expert',
    name='Mobility',
    display_name='Mobility Expert',
    description='You test whether per-trip economics hold once subsidies stop.',
    key_metrics=(
        'Gross bookings growth',
        'Contribution margin per trip',
        'Asset utilization',
        'Fleet cost per unit',
        'Rides or shipments per active user',
    ),
    success_patterns=(
        'Positive contribution margin per trip or shipment',
        'Asset-light model or financed fleet',
        'Density in a few cities before expansion',
    ),
    sector_risks=(
        'Gig worker reclassification',
        'City permits revoked or capped',
        'Capital-intensive fleets',
    ),
    key_regulations=('Gig Worker Classification', 'Operating Permits', 'Safety & Insurance'),
    competition_intensity=CompetitionIntensity.INTENSE,
    consolidation_trend=ConsolidationTrend.CONSOLIDATING,
    typical_exit_multiple=3,
)

CYBERSECURITY = SectorConfig(
    key='cybersecurity-expert',
    name='Cybersecurity',
    display_name='Cybersecurity Expert',
    description='You judge whether the product earns a line in the security budget.',
    key_metrics=(
        'ARR growth YoY',
        'Net Revenue Retention',
        'Gross margin',
        'Average contract value',
        'Detection efficacy / false positive rate',
    ),
    success_patterns=(
        'Category creation ahead of platform vendors',
        'Channel and MSSP distribution',
        'Certifications that unlock regulated buyers',
    ),
    sector_risks=(
        'Platform vendors bundling the feature for free',
        'Breach of the product itself',
        'Long enterprise security reviews',
    ),
    key_regulations=('SOC 2', 'ISO 27001', 'FedRAMP'),
    competition_intensity=CompetitionIntensity.HIGH,
    consolidation_trend=ConsolidationTrend.CONSOLIDATING,
    typical_exit_multiple=8,
)

GENERAL = SectorConfig(
    key='general-expert',
    name='General',
    display_name='Generalist Sector Expert',
    description=(
        'The deal does not fit a covered sector. Identify the closest sector '
        'and apply its standards explicitly.'
    ),
    key_metrics=(
        'Revenue growth YoY',
        'Gross margin',
        'Burn multiple',
        'Customer concentration',
        'Runway (months)',
    ),
    success_patterns=(
        'Clear wedge into a large market',
        'Evidence of repeatable sales',
    ),
    sector_risks=(
        'No established benchmarks for the sector',
        'Unclear regulatory status',
    ),
    typical_exit_multiple=5,
)

# =============================================================================
# Template-only Experts
# =============================================================================

BIOTECH = SectorConfig(
    key='biotech-expert',
    name='Biotech',
    display_name='Biotech Expert',
    description='You value pipelines by clinical stage, probability of success and cash runway.',
    key_metrics=(
        'Lead asset clinical phase',
        'Cash runway to next milestone (months)',
        'Probability of technical success',
        'Addressable patient population',
    ),
    success_patterns=(
        'Validated target with human data',
        'Platform producing several assets',
        'Pharma partnership with upfront payment',
    ),
    sector_risks=(
        'Single-asset binary risk',
        'Runway shorter than the next readout',
        'Regulatory path unclear',
    ),
    maturity=MaturityLevel.EMERGING,
    regulatory_complexity=RegulatoryComplexity.VERY_HIGH,
    key_regulations=('FDA', 'EMA', 'GCP', 'GMP'),
    consolidation_trend=ConsolidationTrend.CONSOLIDATING,
    barrier_to_entry=BarrierToEntry.HIGH,
    typical_exit_multiple=15,
)

HEALTHTECH = SectorConfig(
    key='healthtech-expert',
    name='HealthTech',
    display_name='HealthTech Expert',
    description='You follow who pays: patients, providers, payers or employers.',
    key_metrics=(
        'Revenue growth YoY',
        'Reimbursement coverage',
        'Clinical outcome evidence',
        'Provider or patient retention',
    ),
    success_patterns=(
        'Reimbursement code or payer contracts',
        'Peer-reviewed clinical evidence',
        'Integration with EHR workflows',
    ),
    sector_risks=(
        'No reimbursement path',
        'Medical device classification delays',
        'Health data breach liability',
    ),
    regulatory_complexity=RegulatoryComplexity.HIGH,
    key_regulations=('FDA', 'HIPAA', 'CE Mark', 'GDPR'),
    consolidation_trend=ConsolidationTrend.CONSOLIDATING,
    barrier_to_entry=BarrierToEntry.HIGH,
    typical_exit_multiple=8,
)

DEEPTECH = SectorConfig(
    key='deeptech-expert',
    name='DeepTech',
    display_name='DeepTech Expert',
    description='You weigh technical readiness against time and capital to market.',
    key_metrics=(
        'Technology readiness level (TRL)',
        'Patents granted / filed',
        'Capital to commercialization',
        'Pilot customers',
    ),
    success_patterns=(
        'Defensible IP with a clear path to product',
        'Non-dilutive funding (grants) de-risking R&D',
        'Industrial partners committed to pilots',
    ),
    sector_risks=(
        'Science risk not retired',
        'Decade-long time to revenue',
        'Key-person dependency on founders',
    ),
    maturity=MaturityLevel.EMERGING,
    barrier_to_entry=BarrierToEntry.HIGH,
    typical_exit_multiple=10,
)

CLIMATE = SectorConfig(
    key='climate-expert',
    name='Climate',
    display_name='Climate Tech Expert',
    description='You check that impact and economics both hold without perpetual subsidies.',
    key_metrics=(
        'Revenue growth YoY',
        'Cost per ton CO2 avoided',
        'Gross margin',
        'Offtake contracts signed',
        'Capex per unit of capacity',
    ),
    success_patterns=(
        'Green premium close to zero',
        'Long-term offtake agreements',
        'Project finance available for deployment',
    ),
    sector_risks=(
        'Subsidy or policy dependency',
        'First-of-a-kind plant risk',
        'Commodity price exposure',
    ),
    key_regulations=('IRA', 'EU Green Deal', 'Carbon Tax'),
    consolidation_trend=ConsolidationTrend.CONSOLIDATING,
    barrier_to_entry=BarrierToEntry.HIGH,
    typical_exit_multiple=8,
)

HARDWARE = SectorConfig(
    key='hardware-expert',
    name='Hardware',
    display_name='Hardware & IoT Expert',
    description='You follow the bill of materials, manufacturing yield and attach revenue.',
    key_metrics=(
        'Hardware gross margin',
        'Recurring revenue share',
        'Bill of materials cost trend',
        'Manufacturing yield',
        'Units shipped',
    ),
    success_patterns=(
        'Recurring software or service revenue on the installed base',
        'Contract manufacturer secured at volume',
        'Certifications completed before launch',
    ),
    sector_risks=(
        'Inventory and working capital drag',
        'Supply chain single sourcing',
        'Product recalls',
    ),
    key_regulations=('FCC', 'CE Mark', 'UL'),
    consolidation_trend=ConsolidationTrend.CONSOLIDATING,
    barrier_to_entry=BarrierToEntry.HIGH,
    typical_exit_multiple=5,
)

SPACETECH = SectorConfig(
    key='spacetech-expert',
    name='SpaceTech',
    display_name='SpaceTech Expert',
    description='You weigh launch and hardware risk against contracted demand.',
    key_metrics=(
        'Contracted backlog',
        'Launch cost per kg',
        'Satellites in orbit / planned',
        'Government revenue share',
        'Capital to first revenue',
    ),
    success_patterns=(
        'Anchor government contracts',
        'Data or services revenue on top of hardware',
        'Flight heritage',
    ),
    sector_risks=(
        'Launch failure or delay',
        'Spectrum and licensing delays',
        'Export control limits on customers',
    ),
    maturity=MaturityLevel.EMERGING,
    regulatory_complexity=RegulatoryComplexity.HIGH,
    key_regulations=('ITAR/EAR', 'ITU', 'FAA', 'FCC'),
    consolidation_trend=ConsolidationTrend.CONSOLIDATING,
    barrier_to_entry=BarrierToEntry.HIGH,
    typical_exit_multiple=8,
)

GAMING = SectorConfig(
    key='gaming-expert',
    name='Gaming',
    display_name='Gaming & Entertainment Expert',
    description='You read retention curves before download counts.',
    key_metrics=(
        'D1 / D7 / D30 retention',
        'ARPDAU',
        'Payer conversion',
        'CPI vs LTV',
        'Daily active users',
    ),
    success_patterns=(
        'Hit-independent studio or live-ops engine',
        'D30 retention above genre median',
        'Organic installs share above 50%',
    ),
    sector_risks=(
        'Hit-driven revenue concentration',
        'Platform fee and policy changes',
        'Rising user acquisition costs',
    ),
    key_regulations=('App Store Guidelines', 'GDPR for minors'),
    competition_intensity=CompetitionIntensity.INTENSE,
    consolidation_trend=ConsolidationTrend.CONSOLIDATING,
    typical_exit_multiple=4,
)

CONSUMER = SectorConfig(
    key='consumer-expert',
    name='Consumer',
    display_name='Consumer & D2C Expert',
    description='You check whether the brand can grow without buying every customer.',
    key_metrics=(
        'Revenue growth YoY',
        'Gross margin',
        'Repeat purchase rate',
        'Blended CAC',
        'Contribution margin after marketing',
    ),
    success_patterns=(
        'Organic and word-of-mouth acquisition',
        'Repeat rate above category norms',
        'Omnichannel distribution',
    ),
    sector_risks=(
        'Paid acquisition dependency',
        'Low defensibility against copycats',
        'Inventory risk',
    ),
    maturity=MaturityLevel.MATURE,
    regulatory_complexity=RegulatoryComplexity.LOW,
    competition_intensity=CompetitionIntensity.INTENSE,
    barrier_to_entry=BarrierToEntry.LOW,
    typical_exit_multiple=3,
)

CREATOR = SectorConfig(
    key='creator-expert',
    name='Creator Economy',
    display_name='Creator Economy Expert',
    description='You measure platform risk and creator concentration.',
    key_metrics=(
        'Creator count and retention',
        'Revenue per creator',
        'Take rate',
        'Top 10 creator revenue concentration',
        'Audience growth',
    ),
    success_patterns=(
        'Tools creators pay for directly',
        'Multi-platform distribution',
        'Low dependency on a handful of creators',
    ),
    sector_risks=(
        'Algorithm or platform policy changes',
        'Top creators leaving with their audience',
        'Advertising market cyclicality',
    ),
    competition_intensity=CompetitionIntensity.HIGH,
    barrier_to_entry=BarrierToEntry.LOW,
    typical_exit_multiple=3,
)

# =============================================================================
# Lookup
# =============================================================================

SECTOR_CONFIGS: dict[str, SectorConfig] = {
    c.key: c
    for c in (
        SAAS,
        LEGALTECH,
        HRTECH,
        MARKETPLACE,
        FINTECH,
        AI,
        PROPTECH,
        EDTECH,
        FOODTECH,
        MOBILITY,
        CYBERSECURITY,
        GENERAL,
        BIOTECH,
        HEALTHTECH,
        DEEPTECH,
        CLIMATE,
        HARDWARE,
        SPACETECH,
        GAMING,
        CONSUMER,
        CREATOR,
    )
}
