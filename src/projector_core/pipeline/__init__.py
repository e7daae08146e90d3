"""Analysis pipeline — single-symbol and batch runs, scheduling, CLI."""

from projector_core.pipeline.runner import (
    analyze_batch,
    analyze_symbol,
    fuse_opinions,
    run_scheduled,
    session_ai_settings,
    signal_event,
)

__all__ = [
    "analyze_batch",
    "analyze_symbol",
    "fuse_opinions",
    "run_scheduled",
    "session_ai_settings",
    "signal_event",
]
