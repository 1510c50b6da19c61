"""Tests for the built-in scenario checks."""

from lensbench.core.config import BenchSettings
from lensbench.validation import run_all_cases


def test_all_cases_pass_with_defaults():
    results = run_all_cases()
    assert len(results) == 4
    assert all(r.passed for r in results), [r for r in results if not r.passed]


def test_cases_adapt_to_smaller_cap():
    results = run_all_cases(BenchSettings(max_lenses=2))
    by_name = {r.name: r for r in results}
    assert by_name["Lens cap"].passed
    assert by_name["Distance removal policy"].detail.startswith("skipped")
