from __future__ import annotations

import itertools
import logging
import math
from collections import Counter
from typing import Dict, Hashable, Iterable, List, Mapping, Sequence

import numpy as np

from .core.distributions import ContinuousDistribution
from .core.generator import Generator
from .reference import UniformContinuous, UniformDiscrete

logger = logging.getLogger(__name__)

DEFAULT_ALPHA = 0.01


def chi2_wilson_hilferty_pvalue(stat: float, df: int) -> float:
    if df <= 0:
        return 1.0
    # Wilson-Hilferty approximation: transform chi-square to normal
    t = (stat / df) ** (1.0 / 3.0)
    mu = 1.0 - 2.0 / (9.0 * df)
    sigma = math.sqrt(2.0 / (9.0 * df))
    z = (t - mu) / sigma

    def phi(val: float) -> float:
        return 0.5 * (1.0 + math.erf(val / math.sqrt(2.0)))

    p_right = 1.0 - phi(z)
    return max(0.0, min(1.0, p_right))


def chi_square_test(
    observed: Mapping[Hashable, int], expected_probs: Mapping[Hashable, float]
) -> Dict[str, float]:
    """Goodness of fit of ``observed`` counts against category probabilities.

    Categories with zero probability are excluded from the statistic; any
    observation falling in one makes the p-value 0.
    """
    total = sum(observed.values())
    if total == 0:
        return {"stat": 0.0, "df": 0, "p_value": 1.0}
    stat = 0.0
    categories = 0
    impossible = 0
    for key, prob in expected_probs.items():
        count = observed.get(key, 0)
        if prob <= 0:
            impossible += count
            continue
        expected = total * prob
        stat += (count - expected) ** 2 / expected
        categories += 1
    impossible += sum(c for k, c in observed.items() if k not in expected_probs)
    df = max(categories - 1, 1)
    p = 0.0 if impossible else chi2_wilson_hilferty_pvalue(stat, df)
    return {"stat": round(stat, 6), "df": df, "p_value": round(p, 6)}


def kolmogorov_pvalue(d: float, n: int) -> float:
    """Asymptotic P(D_n > d) for the one-sample Kolmogorov-Smirnov statistic."""
    if n <= 0:
        return 1.0
    root_n = math.sqrt(n)
    lam = (root_n + 0.12 + 0.11 / root_n) * d
    a2 = -2.0 * lam * lam
    fac = 2.0
    total = 0.0
    prev_term = 0.0
    for j in range(1, 101):
        term = fac * math.exp(a2 * j * j)
        total += term
        if abs(term) <= 0.001 * prev_term or abs(term) <= 1e-8 * total:
            return max(0.0, min(1.0, total))
        fac = -fac
        prev_term = abs(term)
    # series did not converge: d is tiny
    return 1.0


def ks_test(samples: Iterable[float], distribution: ContinuousDistribution) -> Dict[str, float]:
    xs = np.sort(np.asarray(list(samples), dtype=float))
    n = int(xs.size)
    if n == 0:
        return {"stat": 0.0, "n": 0, "p_value": 1.0}
    cdf = np.array([distribution.cdf(float(x)) for x in xs])
    ranks = np.arange(1, n + 1, dtype=float)
    d_plus = float(np.max(ranks / n - cdf))
    d_minus = float(np.max(cdf - (ranks - 1) / n))
    d = max(d_plus, d_minus)
    return {"stat": round(d, 6), "n": n, "p_value": round(kolmogorov_pvalue(d, n), 6)}


def unit_interval_report(rng: Generator, draws: int, alpha: float = DEFAULT_ALPHA) -> Dict[str, object]:
    samples = [rng.next_unit() for _ in range(draws)]
    ks = ks_test(samples, UniformContinuous(0.0, 1.0))
    at_upper = sum(1 for x in samples if x >= 1.0)
    return {
        "draws": draws,
        "min": min(samples) if samples else None,
        "max": max(samples) if samples else None,
        "at_or_above_one": at_upper,
        "ks": ks,
        "alpha": alpha,
        "passed": at_upper == 0 and ks["p_value"] >= alpha,
    }


def range_report(
    rng: Generator, low: int, high: int, draws: int, alpha: float = DEFAULT_ALPHA
) -> Dict[str, object]:
    dist = UniformDiscrete(low, high)
    counts = Counter(rng.next_in_range(low, high) for _ in range(draws))
    out_of_range = sum(c for v, c in counts.items() if not low <= v <= high)
    chi2 = chi_square_test(counts, {x: dist.pmf(x) for x in range(low, high + 1)})
    return {
        "low": low,
        "high": high,
        "draws": draws,
        "out_of_range": out_of_range,
        "max_minus_min": (max(counts.values()) - min(counts.values())) if counts else 0,
        "chi2": chi2,
        "alpha": alpha,
        "passed": out_of_range == 0 and chi2["p_value"] >= alpha,
    }


def weighted_choice_report(
    rng: Generator,
    items: Sequence[str],
    weights: Sequence[float],
    draws: int,
    alpha: float = DEFAULT_ALPHA,
) -> Dict[str, object]:
    total = float(sum(weights))
    probs = {item: w / total for item, w in zip(items, weights)}
    counts = Counter(rng.choice(items, weights) for _ in range(draws))
    chi2 = chi_square_test(counts, probs)
    return {
        "items": list(items),
        "weights": list(weights),
        "draws": draws,
        "frequencies": {item: counts.get(item, 0) for item in items},
        "chi2": chi2,
        "alpha": alpha,
        "passed": chi2["p_value"] >= alpha,
    }


def shuffle_report(
    rng: Generator, items: Sequence[int], trials: int, alpha: float = DEFAULT_ALPHA
) -> Dict[str, object]:
    perms: List[tuple] = list(itertools.permutations(items))
    counts: Counter = Counter()
    preserved = True
    for _ in range(trials):
        arr = list(items)
        rng.shuffle(arr)
        if sorted(arr) != sorted(items):
            preserved = False
        counts[tuple(arr)] += 1
    chi2 = chi_square_test(counts, {p: 1.0 / len(perms) for p in perms})
    return {
        "items": list(items),
        "trials": trials,
        "permutations": len(perms),
        "distinct_seen": len(counts),
        "multiset_preserved": preserved,
        "chi2": chi2,
        "alpha": alpha,
        "passed": preserved and chi2["p_value"] >= alpha,
    }


def run_checks(
    rng: Generator,
    *,
    draws: int,
    low: int,
    high: int,
    alpha: float = DEFAULT_ALPHA,
) -> Dict[str, object]:
    tests = {
        "next_unit": unit_interval_report(rng, draws, alpha),
        "next_in_range": range_report(rng, low, high, draws, alpha),
        "weighted_choice": weighted_choice_report(rng, ["a", "b", "c"], [1, 0, 3], draws, alpha),
        "shuffle": shuffle_report(rng, [1, 2, 3, 4], draws, alpha),
    }
    for name, result in tests.items():
        logger.debug("check %s passed=%s", name, result["passed"])
    return {"tests": tests, "passed": all(bool(t["passed"]) for t in tests.values())}
