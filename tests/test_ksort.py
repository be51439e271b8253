import random
from collections import Counter

import pytest

from mmkit.ksort import heap_down, heap_make, insertion_sort, ksmall, radix_sort


def _is_max_heap(values):
    n = len(values)
    return all(
        not values[i] < values[c]
        for i in range(n)
        for c in (2 * i + 1, 2 * i + 2)
        if c < n
    )


@pytest.mark.parametrize("n", [0, 1, 2, 7, 50, 301])
def test_heap_make_produces_max_heap(n):
    rng = random.Random(n)
    values = [rng.randrange(1000) for _ in range(n)]
    original = Counter(values)
    heap_make(values)
    assert _is_max_heap(values)
    assert Counter(values) == original
    if values:
        assert values[0] == max(values)


def test_heap_down_small_example():
    values = [1, 5, 3]
    heap_down(values, 0, 3)
    assert values == [5, 1, 3]


def test_heap_down_restores_heap_after_root_replaced():
    rng = random.Random(3)
    values = [rng.randrange(100) for _ in range(40)]
    heap_make(values)
    values[0] = -1
    before = Counter(values)
    heap_down(values, 0, len(values))
    assert _is_max_heap(values)
    assert Counter(values) == before
    assert values[0] == max(values)
    assert values[0] != -1


def test_heap_sort_by_repeated_heap_down():
    rng = random.Random(4)
    values = [rng.randrange(500) for _ in range(120)]
    expected = sorted(values)
    heap_make(values)
    for end in range(len(values) - 1, 0, -1):
        values[0], values[end] = values[end], values[0]
        heap_down(values, 0, end)
    assert values == expected


@pytest.mark.parametrize("seed", range(6))
def test_ksmall_matches_sorted_position(seed):
    rng = random.Random(seed)
    values = [rng.randrange(50) for _ in range(rng.randrange(1, 200))]
    expected = sorted(values)
    for k in (0, len(values) // 2, len(values) - 1):
        work = list(values)
        assert ksmall(work, k) == expected[k]
        assert sorted(work) == expected


def test_ksmall_out_of_range():
    with pytest.raises(IndexError):
        ksmall([1, 2, 3], 3)
    with pytest.raises(IndexError):
        ksmall([], 0)


def test_insertion_sort_is_stable_with_key():
    pairs = [(3, "a"), (1, "b"), (3, "c"), (2, "d"), (1, "e")]
    insertion_sort(pairs, key=lambda p: p[0])
    assert pairs == sorted(pairs, key=lambda p: p[0])


def test_insertion_sort_without_key():
    values = [5, 3, 9, 1, 1, 0]
    insertion_sort(values)
    assert values == sorted([5, 3, 9, 1, 1, 0])


@pytest.mark.parametrize("n,key_bytes,limit", [(10, 8, 1 << 64), (500, 1, 256), (3000, 2, 1 << 16), (5000, 8, 1 << 64)])
def test_radix_sort_orders_by_key(n, key_bytes, limit):
    rng = random.Random(n)
    values = [rng.randrange(limit) for _ in range(n)]
    expected = sorted(values)
    radix_sort(values, key_bytes=key_bytes)
    assert values == expected


def test_radix_sort_with_key_keeps_items():
    rng = random.Random(11)
    items = [(rng.randrange(1 << 32), i) for i in range(2000)]
    original = Counter(items)
    radix_sort(items, key=lambda p: p[0], key_bytes=4)
    keys = [p[0] for p in items]
    assert keys == sorted(keys)
    assert Counter(items) == original


def test_radix_sort_many_duplicates():
    rng = random.Random(12)
    values = [rng.randrange(4) for _ in range(1000)]
    expected = sorted(values)
    radix_sort(values, key_bytes=8)
    assert values == expected


def test_radix_sort_rejects_zero_key_bytes():
    with pytest.raises(ValueError):
        radix_sort([1, 2], key_bytes=0)