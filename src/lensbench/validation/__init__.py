"""Scenario checks for the lens bench."""

from .cases import CaseResult, run_all_cases

__all__ = [
    "CaseResult",
    "run_all_cases",
]
