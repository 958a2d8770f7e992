"""
Structured logging for the sector expert pipeline.

structlog renders pretty console lines in development and JSON lines in
production (LOG_JSON=true). Every entry emitted while an expert runs carries
the deal, analysis and expert it belongs to; those fields live in context
variables so concurrently gathered experts never see each other's values.

PipelineTimer measures the stages of one expert invocation
(build_prompt, model_call, parse, validate, normalize).
"""

import logging
import sys
import time
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any, Generator

import structlog
from structlog.types import Processor

from .config import config

# Log field name -> context variable holding its value
_CONTEXT_FIELDS: dict[str, ContextVar[str | None]] = {
    'deal_id': ContextVar('deal_id', default=None),
    'analysis_id': ContextVar('analysis_id', default=None),
    'expert': ContextVar('expert', default=None),
}


def get_deal_id() -> str | None:
    return _CONTEXT_FIELDS['deal_id'].get()


def get_analysis_id() -> str | None:
    return _CONTEXT_FIELDS['analysis_id'].get()


def get_expert_name() -> str | None:
    """Name of the expert currently running, if any."""
    return _CONTEXT_FIELDS['expert'].get()


def add_context_info(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Processor that copies the deal/analysis/expert context into the entry."""
    for field, var in _CONTEXT_FIELDS.items():
        value = var.get()
        if value:
            event_dict[field] = value
    return event_dict


def _renderer(json_output: bool) -> list[Processor]:
    if json_output:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]


def configure_logging(
    json_output: bool | None = None,
    log_level: str | None = None,
) -> None:
    """
    Configure structlog for the pipeline.

    Args:
        json_output: JSON lines if True, console lines if False
            (defaults to config.LOG_JSON)
        log_level: Override log level (defaults to config.LOG_LEVEL)
    """
    if json_output is None:
        json_output = config.LOG_JSON
    level_num = getattr(logging, (log_level or config.LOG_LEVEL).upper(), logging.INFO)

    logging.basicConfig(format='%(message)s', stream=sys.stdout, level=level_num)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_context_info,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt='iso'),
            structlog.processors.StackInfoRenderer(),
            *_renderer(json_output),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger (name is typically __name__)."""
    return structlog.get_logger(name)


@contextmanager
def logging_context(
    deal_id: str | None = None,
    analysis_id: str | None = None,
    expert: str | None = None,
) -> Generator[None, None, None]:
    """
    Attach deal/analysis/expert fields to every log entry inside the block.

    None leaves the enclosing value in place. Values are restored on exit.

    Usage:
        with logging_context(deal_id="deal_123", expert="saas-expert"):
            logger.info("expert_started")  # includes deal_id and expert
    """
    values = {'deal_id': deal_id, 'analysis_id': analysis_id, 'expert': expert}
    tokens: list[tuple[ContextVar[str | None], Token[str | None]]] = [
        (_CONTEXT_FIELDS[field], _CONTEXT_FIELDS[field].set(value))
        for field, value in values.items()
        if value is not None
    ]
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


class PipelineTimer:
    """
    Stage durations of one expert invocation, in milliseconds.

    Usage:
        timer = PipelineTimer()
        with timer.stage("model_call"):
            ...
        result.stage_timings = timer.stage_timings()
    """

    def __init__(self):
        self.stages: dict[str, float] = {}
        self.start_time: float = time.perf_counter()

    @contextmanager
    def stage(self, name: str) -> Generator[None, None, None]:
        """Time a stage; the duration is kept even if the stage raises."""
        started = time.perf_counter()
        try:
            yield
        finally:
            self.stages[name] = (time.perf_counter() - started) * 1000

    @property
    def total_ms(self) -> float:
        """Milliseconds since the timer was created."""
        return (time.perf_counter() - self.start_time) * 1000

    def stage_timings(self) -> dict[str, float]:
        return {name: round(ms, 2) for name, ms in self.stages.items()}

    def summary(self) -> dict[str, Any]:
        """Log fields: total_ms and per-stage timings."""
        return {'total_ms': round(self.total_ms, 2), 'stages': self.stage_timings()}


configure_logging()
