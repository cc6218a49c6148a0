"""Streaming catalog pipeline: load, unify, audit and analyze."""

from .pipeline import (
    AnalysisResult,
    run_analysis,
    run_audit,
    step_1_load,
    step_2_unify,
    step_3_audit,
    step_4_analyze,
)

__all__ = [
    "AnalysisResult",
    "step_1_load",
    "step_2_unify",
    "step_3_audit",
    "step_4_analyze",
    "run_audit",
    "run_analysis",
]
