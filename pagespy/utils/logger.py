"""
Structured logging utility for pagespy.
Provides structured logs with trace IDs so one extraction can be followed
from the page fetch through every field resolver.
"""
import uuid
import logging
import structlog
from contextvars import ContextVar
from typing import Any, Dict, List, Optional

from pagespy.config import config

# Trace ID of the extraction being served; empty until one is assigned
trace_id_var: ContextVar[str] = ContextVar("trace_id", default="")


def _new_trace_id() -> str:
    return uuid.uuid4().hex[:8]


def get_trace_id() -> str:
    """Get the current trace ID, assigning one if none is set yet."""
    trace_id = trace_id_var.get()
    if not trace_id:
        trace_id = _new_trace_id()
        trace_id_var.set(trace_id)
    return trace_id


def set_trace_id(trace_id: Optional[str] = None) -> str:
    """Start a new trace for the current context and return its ID."""
    new_trace_id = trace_id or _new_trace_id()
    trace_id_var.set(new_trace_id)
    return new_trace_id


def add_trace_id(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """structlog processor stamping every event with the trace ID."""
    event_dict.setdefault("trace_id", get_trace_id())
    return event_dict


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """
    Configure structlog.

    Args:
        level: Minimum level name; defaults to ``LOG_LEVEL``
        fmt: ``json`` or ``console``; defaults to ``LOG_FORMAT``
    """
    level = (level or config.LOG_LEVEL).upper()
    fmt = fmt or config.LOG_FORMAT

    processors = [
        structlog.contextvars.merge_contextvars,
        add_trace_id,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=config.DEBUG))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level, logging.INFO)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger instance with the given name."""
    return structlog.get_logger(name)


class LayerLogger:
    """
    Logger bound to one extraction layer (fetcher, readability, secondary
    lookups, assembler), so every event carries a ``layer`` field.
    """

    def __init__(self, layer_name: str):
        self.layer_name = layer_name
        self.logger = get_logger(layer_name).bind(layer=layer_name)

    def log_action(self, action: str, status: str = "started", **extra):
        """Log the start or end of a unit of work."""
        self.logger.info(f"action_{status}", action=action, **extra)

    def log_decision(self, decision: str, reason: str, url: Optional[str] = None, **extra):
        """Log which strategy a resolver settled on, or that none matched."""
        self.logger.info("decision_made", decision=decision, reason=reason, url=url, **extra)

    def log_fallback(self, from_source: str, to_source: str, reason: str, **extra):
        """Log a soft miss that hands over to the next source."""
        self.logger.debug(
            "fallback_triggered",
            from_source=from_source,
            to_source=to_source,
            reason=reason,
            **extra
        )

    def log_http_fetch(self, url: str, status_code: Optional[int], result: str, **extra):
        """Log the outcome of an HTTP fetch."""
        self.logger.info("http_fetch", url=url, status_code=status_code, result=result, **extra)

    def log_resolution(self, fields_present: List[str], fields_missing: List[str], **extra):
        """Log which optional record fields were resolved."""
        self.logger.info(
            "entry_resolved",
            fields_present=fields_present,
            fields_missing=fields_missing,
            **extra
        )


# Initialize logging on module import
configure_logging()
