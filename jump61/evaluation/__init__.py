"""Evaluation helpers for Jump61 players."""

from .match import (
    EvaluationConfig,
    EvaluationResult,
    Policy,
    RandomPolicy,
    SearchPolicy,
    evaluate_policies,
)

__all__ = [
    "EvaluationConfig",
    "EvaluationResult",
    "Policy",
    "RandomPolicy",
    "SearchPolicy",
    "evaluate_policies",
]
