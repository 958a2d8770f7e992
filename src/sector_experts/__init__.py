"""
Sector Expert Pipeline

Routes a VC deal to the sector expert for its declared sector, runs the
expert against an LLM, and normalizes every expert's output into one
canonical, completeness-capped result.
"""

__version__ = '0.1.0'

# Re-export key classes for convenience
from .pipeline.pipeline import SectorExpertPipeline
from .pipeline import (
    ExpertResult,
    SectorExpert,
    SectorPromptTemplate,
    SectorRouter,
    SpecialistExpert,
    TemplateExpertAdapter,
    assess_completeness,
    cap_score,
    classify_sector,
    classify_sector_all,
    normalize_sector_output,
    normalize_specialist_output,
    validate_output,
)
from .experts import ExpertDescriptor, ExpertRegistry, build_registry
from .models import (
    Deal,
    EnrichedContext,
    FundingDbContext,
    NormalizedResult,
    SectorConfig,
)
from .clients import CompletionResult, OpenAIClient
from .logging import (
    configure_logging,
    get_logger,
    logging_context,
    PipelineTimer,
)
from .errors import (
    SectorExpertError,
    PipelineError,
    RegistryError,
    ExpertInvocationError,
    ModelTimeoutError,
    UnparseableResponseError,
    OpenAIError,
)

__all__ = [
    # Version
    '__version__',
    # Main Pipeline
    'SectorExpertPipeline',
    'ExpertResult',
    # Experts
    'SectorExpert',
    'SpecialistExpert',
    'SectorPromptTemplate',
    'TemplateExpertAdapter',
    'ExpertDescriptor',
    'ExpertRegistry',
    'build_registry',
    # Components
    'SectorRouter',
    'classify_sector',
    'classify_sector_all',
    'validate_output',
    'assess_completeness',
    'cap_score',
    'normalize_sector_output',
    'normalize_specialist_output',
    # Models
    'Deal',
    'EnrichedContext',
    'FundingDbContext',
    'NormalizedResult',
    'SectorConfig',
    # Clients
    'CompletionResult',
    'OpenAIClient',
    # Logging
    'configure_logging',
    'get_logger',
    'logging_context',
    'PipelineTimer',
    # Errors
    'SectorExpertError',
    'PipelineError',
    'RegistryError',
    'ExpertInvocationError',
    'ModelTimeoutError',
    'UnparseableResponseError',
    'OpenAIError',
]
