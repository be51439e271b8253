"""Extension results, z-drop tests, CIGAR building and DP backtracking."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag
from typing import List, Optional, Sequence

from .model import CigarOp

NEG_INF = -0x40000000


class EzFlag(IntFlag):
    """Flags controlling an extension alignment."""

    SCORE_ONLY = 0x01  # don't record alignment path/cigar
    RIGHT = 0x02  # right-align gaps
    GENERIC_SC = 0x04  # without this: match/mismatch only; last symbol is a wildcard
    APPROX_MAX = 0x08  # approximate max
    APPROX_DROP = 0x10  # approximate Z-drop
    EXTZ_ONLY = 0x40  # only perform extension
    REV_CIGAR = 0x80  # reverse CIGAR in the output
    SPLICE_FOR = 0x100
    SPLICE_REV = 0x200
    SPLICE_FLANK = 0x400


@dataclass
class ExtensionResult:
    """Scores, extension coordinates and CIGAR of an extension alignment."""

    max: int = 0
    zdropped: bool = False
    max_q: int = -1  # max extension coordinate on the query
    max_t: int = -1  # max extension coordinate on the target
    mqe: int = NEG_INF  # max score when reaching the end of query
    mqe_t: int = -1
    mte: int = NEG_INF  # max score when reaching the end of target
    mte_q: int = -1
    score: int = NEG_INF  # max score reaching both ends
    reach_end: bool = False
    cigar: List[int] = field(default_factory=list)

    @property
    def n_cigar(self) -> int:
        """Number of CIGAR operations."""
        return len(self.cigar)

    def reset(self) -> None:
        """Return to the state before any extension was done."""
        self.max_q = self.max_t = self.mqe_t = self.mte_q = -1
        self.max = 0
        self.score = self.mqe = self.mte = NEG_INF
        self.cigar = []
        self.zdropped = False
        self.reach_end = False

    def apply_zdrop(self, is_rot: bool, h: int, a: int, b: int, zdrop: int, e: int) -> bool:
        """Record a new maximum or test for a z-drop; True if the extension must stop.

        With ``is_rot`` the cell is given as (anti-diagonal, target position),
        otherwise as (target position, query position).
        """
        if is_rot:
            r, t = a, b
        else:
            r, t = a + b, a
        if h > self.max:
            self.max = h
            self.max_t = t
            self.max_q = r - t
        elif t >= self.max_t and r - t >= self.max_q:
            tl = t - self.max_t
            ql = (r - t) - self.max_q
            gap = abs(tl - ql)
            if zdrop >= 0 and self.max - h > zdrop + gap * e:
                self.zdropped = True
                return True
        return False


def push_cigar(cigar: List[int], op: int, length: int) -> None:
    """Append ``length`` of operator ``op`` to a BAM-encoded CIGAR, merging runs."""
    if cigar and (cigar[-1] & 0xF) == op:
        cigar[-1] += length << 4
    else:
        cigar.append(length << 4 | int(op))


def backtrack(
    p: Sequence[int],
    off: Sequence[int],
    off_end: Optional[Sequence[int]],
    n_col: int,
    i0: int,
    j0: int,
    is_rot: bool = False,
    is_rev: bool = False,
    min_intron_len: int = 0,
) -> List[int]:
    """Trace a backtrack matrix from cell (i0, j0) and return the BAM-encoded CIGAR.

    Each ``p`` value holds in bits 0-2 the state giving the maximum
    (0 H, 1 E, 2 F, 3 E~, 4 F~) and in bits 3-6 the continuation flags of
    the E, F, E~ and F~ states.
    """
    cigar: List[int] = []
    i, j, state = i0, j0, 0
    while i >= 0 and j >= 0:
        force_state = -1
        if is_rot:
            r = i + j
            if i < off[r]:
                force_state = 2
            if off_end is not None and i > off_end[r]:
                force_state = 1
            tmp = p[r * n_col + i - off[r]] if force_state < 0 else 0
        else:
            if j < off[i]:
                force_state = 2
            if off_end is not None and j > off_end[i]:
                force_state = 1
            tmp = p[i * n_col + j - off[i]] if force_state < 0 else 0
        if state == 0:
            state = tmp & 7
        elif not (tmp >> (state + 2) & 1):
            state = 0
        if state == 0:
            state = tmp & 7
        if force_state >= 0:
            state = force_state
        if state == 0:
            push_cigar(cigar, CigarOp.MATCH, 1)
            i -= 1
            j -= 1
        elif state == 1 or (state == 3 and min_intron_len <= 0):
            push_cigar(cigar, CigarOp.DEL, 1)
            i -= 1
        elif state == 3:
            push_cigar(cigar, CigarOp.N_SKIP, 1)
            i -= 1
        else:
            push_cigar(cigar, CigarOp.INS, 1)
            j -= 1
    if i >= 0:
        op = CigarOp.N_SKIP if min_intron_len > 0 and i >= min_intron_len else CigarOp.DEL
        push_cigar(cigar, op, i + 1)
    if j >= 0:
        push_cigar(cigar, CigarOp.INS, j + 1)
    if not is_rev:
        cigar.reverse()
    return cigar