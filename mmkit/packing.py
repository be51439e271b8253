"""Seed records, seed bit fields, 4-bit packed sequences and a fast log2."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from enum import IntFlag
from typing import List, MutableSequence, Tuple

PARENT_UNSET = -1
PARENT_TMP_PRI = -2

SEED_SEG_SHIFT = 48
SEED_SEG_MASK = 0xFF << SEED_SEG_SHIFT

_U32 = 0xFFFFFFFF


class SeedFlag(IntFlag):
    """Flag bits stored in the high part of an anchor's y value."""

    LONG_JOIN = 1 << 40
    IGNORE = 1 << 41
    TANDEM = 1 << 42
    SELF = 1 << 43


@dataclass
class Seed:
    """A query minimizer together with its hits in the index."""

    n: int = 0
    q_pos: int = 0
    q_span: int = 0
    flt: bool = False
    seg_id: int = 0
    is_tandem: bool = False
    cr: Tuple[int, ...] = ()


@dataclass
class Segment:
    """Chains and anchors of one query segment."""

    u: List[int] = field(default_factory=list)
    a: List[Tuple[int, int]] = field(default_factory=list)

    @property
    def n_u(self) -> int:
        """Number of chains."""
        return len(self.u)

    @property
    def n_a(self) -> int:
        """Number of anchors."""
        return len(self.a)


def seed_segment(x: int) -> int:
    """Return the segment id stored in an anchor's y value."""
    return (x & SEED_SEG_MASK) >> SEED_SEG_SHIFT


def seq4_set(s: MutableSequence[int], i: int, c: int) -> None:
    """OR the 4-bit code ``c`` into position ``i`` of the packed words ``s``."""
    if not 0 <= c <= 0xF:
        raise ValueError(f"4-bit code out of range: {c}")
    s[i >> 3] = (s[i >> 3] | (c << ((i & 7) << 2))) & _U32


def seq4_get(s: MutableSequence[int], i: int) -> int:
    """Return the 4-bit code at position ``i`` of the packed words ``s``."""
    return s[i >> 3] >> ((i & 7) << 2) & 0xF


def _f32(x: float) -> float:
    return struct.unpack("<f", struct.pack("<f", x))[0]


def mg_log2(x: float) -> float:
    """Approximate base-2 logarithm of a positive float, in single precision."""
    if not (x > 0 and math.isfinite(x)):
        raise ValueError(f"mg_log2 needs a positive finite number, got {x}")
    bits = struct.unpack("<I", struct.pack("<f", x))[0]
    log_2 = float(((bits >> 23) & 255) - 128)
    bits &= ~(255 << 23) & _U32
    bits += 127 << 23
    mant = struct.unpack("<f", struct.pack("<I", bits & _U32))[0]
    poly = _f32(_f32(_f32(-0.34484843 * mant) + 2.02466578) * mant)
    return _f32(log_2 + _f32(poly - 0.67487759))