from __future__ import annotations

import itertools
from collections import Counter

from hypothesis import given, strategies as st

from diceforge.rng import create_generator
from diceforge.stats import chi_square_test


def test_all_24_permutations_roughly_uniform():
    g = create_generator("pcg64", 4242)
    perms = list(itertools.permutations([1, 2, 3, 4]))
    counts: Counter = Counter()
    for _ in range(24000):
        arr = [1, 2, 3, 4]
        g.shuffle(arr)
        counts[tuple(arr)] += 1
    assert set(counts) == set(perms)
    result = chi_square_test(counts, {p: 1 / 24 for p in perms})
    assert result["df"] == 23
    assert result["p_value"] >= 0.001


@given(
    items=st.lists(st.integers(min_value=-100, max_value=100), max_size=30),
    seed=st.integers(min_value=0, max_value=2**32),
)
def test_shuffle_preserves_multiset(items, seed):
    g = create_generator("py_random", seed)
    arr = list(items)
    g.shuffle(arr)
    assert Counter(arr) == Counter(items)


def test_shuffle_empty_and_singleton():
    g = create_generator("py_random", 0)
    empty: list = []
    g.shuffle(empty)
    assert empty == []
    one = ["only"]
    g.shuffle(one)
    assert one == ["only"]


def test_shuffle_same_seed_same_permutation():
    a = list(range(50))
    b = list(range(50))
    create_generator("bbs", 31337).shuffle(a)
    create_generator("bbs", 31337).shuffle(b)
    assert a == b
    assert sorted(a) == list(range(50))


def test_shuffle_uses_one_draw_per_position():
    g = create_generator("py_random", 9)
    ref = create_generator("py_random", 9)
    arr = list("abcdef")
    g.shuffle(arr)
    pool = list("abcdef")
    expected = [pool.pop(ref.next_in_range(0, len(pool) - 1)) for _ in range(6)]
    assert arr == expected
