from __future__ import annotations

import json

import pytest

from diceforge.reference import UniformContinuous
from diceforge.rng import ENGINES, create_generator
from diceforge.stats import (
    chi2_wilson_hilferty_pvalue,
    chi_square_test,
    kolmogorov_pvalue,
    ks_test,
    run_checks,
    unit_interval_report,
)


def test_chi2_pvalue_bounds():
    assert chi2_wilson_hilferty_pvalue(5.0, 0) == 1.0
    assert chi2_wilson_hilferty_pvalue(0.0, 10) == pytest.approx(1.0, abs=1e-3)
    assert chi2_wilson_hilferty_pvalue(500.0, 10) < 1e-6


def test_chi_square_perfect_fit():
    result = chi_square_test({1: 100, 2: 100, 3: 100}, {1: 1 / 3, 2: 1 / 3, 3: 1 / 3})
    assert result["stat"] == 0.0
    assert result["df"] == 2
    assert result["p_value"] > 0.99


def test_chi_square_impossible_observation_fails():
    result = chi_square_test({"a": 10, "b": 1}, {"a": 1.0, "b": 0.0})
    assert result["p_value"] == 0.0
    unexpected = chi_square_test({"a": 10, "z": 1}, {"a": 1.0})
    assert unexpected["p_value"] == 0.0


def test_kolmogorov_pvalue_limits():
    assert kolmogorov_pvalue(0.0, 100) == 1.0
    assert kolmogorov_pvalue(0.5, 1000) < 1e-10
    assert 0.0 < kolmogorov_pvalue(0.03, 1000) < 1.0


def test_ks_even_grid_is_uniform():
    samples = [(i + 0.5) / 1000 for i in range(1000)]
    result = ks_test(samples, UniformContinuous(0.0, 1.0))
    assert result["stat"] == pytest.approx(0.0005)
    assert result["p_value"] == 1.0


def test_ks_detects_compressed_samples():
    samples = [i / 2000 for i in range(1000)]  # all in [0, 0.5)
    result = ks_test(samples, UniformContinuous(0.0, 1.0))
    assert result["stat"] == pytest.approx(0.5, abs=1e-3)
    assert result["p_value"] < 1e-6


def test_unit_interval_report_has_no_upper_bound_hits():
    rep = unit_interval_report(create_generator("py_random", 1), 5000)
    assert rep["at_or_above_one"] == 0
    assert rep["max"] < 1.0


@pytest.mark.parametrize("engine", ENGINES)
def test_next_unit_passes_kolmogorov_smirnov(engine):
    rep = unit_interval_report(create_generator(engine, 20240917), 20000)
    assert rep["ks"]["n"] == 20000
    assert rep["ks"]["p_value"] >= 0.001
    assert 0.0 <= rep["min"] < 0.01
    assert 0.99 < rep["max"] < 1.0


def test_run_checks_report_shape_and_invariants():
    rep = run_checks(create_generator("pcg64", 2024), draws=2000, low=1, high=6)
    tests = rep["tests"]
    assert set(tests) == {"next_unit", "next_in_range", "weighted_choice", "shuffle"}
    assert tests["next_in_range"]["out_of_range"] == 0
    assert tests["weighted_choice"]["frequencies"]["b"] == 0
    assert tests["shuffle"]["multiset_preserved"] is True
    assert tests["shuffle"]["permutations"] == 24
    assert isinstance(rep["passed"], bool)
    json.dumps(rep)  # report must be JSON-ready
