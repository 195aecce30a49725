"""
rediscache — Observability Module

Structured JSON logging and trace-id context.

Usage:
    from rediscache.observability import setup_logging, trace_context

    setup_logging("DEBUG")
    with trace_context("123"):
        logger.info("stored")  # {"message": "stored", "trace_id": "123", ...}
"""

from .logging import (
    JSONFormatter,
    get_trace_id,
    set_trace_id,
    setup_logging,
    trace_context,
)

__all__ = [
    "JSONFormatter",
    "get_trace_id",
    "set_trace_id",
    "setup_logging",
    "trace_context",
]
