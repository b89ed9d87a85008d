from __future__ import annotations

import pytest
from hypothesis import given, strategies as st

from diceforge.core.distributions import ContinuousDistribution, DiscreteDistribution
from diceforge.reference import UniformContinuous, UniformDiscrete


@pytest.mark.parametrize(
    "call",
    [
        lambda d: d.variance(),
        lambda d: d.expectation(),
        lambda d: d.min_value(),
        lambda d: d.max_value(),
        lambda d: d.cdf(0),
    ],
)
@pytest.mark.parametrize("cls", [ContinuousDistribution, DiscreteDistribution])
def test_contracts_have_no_defaults(cls, call):
    with pytest.raises(NotImplementedError):
        call(cls())


def test_density_and_mass_have_no_defaults():
    with pytest.raises(NotImplementedError):
        ContinuousDistribution().pdf(0.5)
    with pytest.raises(NotImplementedError):
        DiscreteDistribution().pmf(1)


def test_uniform_continuous_moments():
    d = UniformContinuous(2.0, 6.0)
    assert d.expectation() == 4.0
    assert d.variance() == pytest.approx(16.0 / 12.0)
    assert (d.min_value(), d.max_value()) == (2.0, 6.0)
    assert d.pdf(3.0) == 0.25
    assert d.pdf(7.0) == 0.0
    assert d.cdf(1.0) == 0.0
    assert d.cdf(4.0) == 0.5
    assert d.cdf(6.0) == 1.0


@given(
    xs=st.lists(st.floats(min_value=-10, max_value=10, allow_nan=False), min_size=2, max_size=20)
)
def test_uniform_continuous_cdf_non_decreasing(xs):
    d = UniformContinuous(-1.0, 3.0)
    values = [d.cdf(x) for x in sorted(xs)]
    assert values == sorted(values)
    assert all(0.0 <= v <= 1.0 for v in values)


def test_fair_die():
    d = UniformDiscrete(1, 6)
    assert d.expectation() == 3.5
    assert d.variance() == pytest.approx(35.0 / 12.0)
    assert sum(d.pmf(x) for x in range(d.min_value(), d.max_value() + 1)) == pytest.approx(1.0)
    assert d.pmf(0) == 0.0
    assert d.cdf(0) == 0.0
    assert d.cdf(3) == pytest.approx(0.5)
    assert d.cdf(6) == 1.0


@given(low=st.integers(min_value=-50, max_value=50), size=st.integers(min_value=1, max_value=40))
def test_uniform_discrete_cdf_matches_pmf_sum(low, size):
    d = UniformDiscrete(low, low + size - 1)
    running = 0.0
    for x in range(low, low + size):
        running += d.pmf(x)
        assert d.cdf(x) == pytest.approx(running)


@pytest.mark.parametrize("cls, args", [(UniformContinuous, (1.0, 1.0)), (UniformDiscrete, (3, 2))])
def test_invalid_parameters(cls, args):
    with pytest.raises(ValueError):
        cls(*args)
