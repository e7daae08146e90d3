"""Indicator derivation, rule scoring and signal fusion."""

from projector_core.analysis.classifier import AnalysisParams, classify, resolve_params, select_params
from projector_core.analysis.engine import compute_indicators
from projector_core.analysis.fusion import fuse
from projector_core.analysis.generator import generate_signal
from projector_core.analysis.rules import RULES, Rule, score_rules

__all__ = [
    "AnalysisParams",
    "RULES",
    "Rule",
    "classify",
    "compute_indicators",
    "fuse",
    "generate_signal",
    "resolve_params",
    "score_rules",
    "select_params",
]
