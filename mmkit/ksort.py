"""Heap, selection, insertion and radix sorting over Python lists."""

from __future__ import annotations

from typing import Any, Callable, List, MutableSequence, Optional

RS_MIN_SIZE = 64
RS_MAX_BITS = 8

KeyFunc = Callable[[Any], int]


def heap_down(values: MutableSequence, i: int, n: int) -> None:
    """Sift ``values[i]`` down a max-heap made of the first ``n`` items."""
    tmp = values[i]
    k = i
    while (k := (k << 1) + 1) < n:
        if k != n - 1 and values[k] < values[k + 1]:
            k += 1
        if values[k] < tmp:
            break
        values[i] = values[k]
        i = k
    values[i] = tmp


def heap_make(values: MutableSequence) -> None:
    """Rearrange ``values`` in place into a max-heap."""
    n = len(values)
    for i in range((n >> 1) - 1, -1, -1):
        heap_down(values, i, n)


def ksmall(values: MutableSequence, k: int) -> Any:
    """Return the ``k``-th smallest item (0-based), partially reordering ``values``."""
    n = len(values)
    if not 0 <= k < n:
        raise IndexError(f"k={k} out of range for {n} values")
    a = values
    low, high = 0, n - 1
    while True:
        if high <= low:
            return a[k]
        if high == low + 1:
            if a[high] < a[low]:
                a[low], a[high] = a[high], a[low]
            return a[k]
        mid = low + (high - low) // 2
        if a[high] < a[mid]:
            a[mid], a[high] = a[high], a[mid]
        if a[high] < a[low]:
            a[low], a[high] = a[high], a[low]
        if a[low] < a[mid]:
            a[mid], a[low] = a[low], a[mid]
        a[mid], a[low + 1] = a[low + 1], a[mid]
        ll, hh = low + 1, high
        while True:
            ll += 1
            while a[ll] < a[low]:
                ll += 1
            hh -= 1
            while a[low] < a[hh]:
                hh -= 1
            if hh < ll:
                break
            a[ll], a[hh] = a[hh], a[ll]
        a[low], a[hh] = a[hh], a[low]
        if hh <= k:
            low = ll
        if hh >= k:
            high = hh - 1


def _identity(x: Any) -> Any:
    return x


def _insertion_sort_range(a: MutableSequence, beg: int, end: int, key: KeyFunc) -> None:
    for i in range(beg + 1, end):
        tmp = a[i]
        tkey = key(tmp)
        if tkey < key(a[i - 1]):
            j = i
            while j > beg and tkey < key(a[j - 1]):
                a[j] = a[j - 1]
                j -= 1
            a[j] = tmp


def insertion_sort(values: MutableSequence, key: Optional[KeyFunc] = None) -> None:
    """Stable in-place insertion sort by ``key``."""
    _insertion_sort_range(values, 0, len(values), key or _identity)


def _rs_sort(a: MutableSequence, beg: int, end: int, n_bits: int, s: int, key: KeyFunc) -> None:
    size = 1 << n_bits
    m = size - 1
    counts: List[int] = [0] * size
    for item in a[beg:end]:
        counts[key(item) >> s & m] += 1
    starts: List[int] = []
    ends: List[int] = []
    pos = beg
    for count in counts:
        starts.append(pos)
        pos += count
        ends.append(pos)

    k = 0
    while k < size:
        if starts[k] == ends[k]:
            k += 1
            continue
        bucket = key(a[starts[k]]) >> s & m
        if bucket != k:
            tmp = a[starts[k]]
            while True:
                swap = tmp
                tmp = a[starts[bucket]]
                a[starts[bucket]] = swap
                starts[bucket] += 1
                bucket = key(tmp) >> s & m
                if bucket == k:
                    break
            a[starts[k]] = tmp
        starts[k] += 1

    starts = [beg] + ends[:-1]
    if s:
        s = s - n_bits if s > n_bits else 0
        for b, e in zip(starts, ends):
            if e - b > RS_MIN_SIZE:
                _rs_sort(a, b, e, n_bits, s, key)
            elif e - b > 1:
                _insertion_sort_range(a, b, e, key)


def radix_sort(values: MutableSequence, key: Optional[KeyFunc] = None, key_bytes: int = 8) -> None:
    """Sort in place by an unsigned integer key of ``key_bytes`` bytes (MSD radix)."""
    if key_bytes < 1:
        raise ValueError("key_bytes must be at least 1")
    key = key or _identity
    n = len(values)
    if n <= RS_MIN_SIZE:
        _insertion_sort_range(values, 0, n, key)
    else:
        _rs_sort(values, 0, n, RS_MAX_BITS, (key_bytes - 1) * RS_MAX_BITS, key)