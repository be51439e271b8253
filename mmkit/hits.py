"""Flat hit records for callers and reverse complementing of sequences."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple, Union

from .model import Index, Region

_COMP_FROM = "ACGTUNRYKMSWBDHVacgtunrykmswbdhv"
_COMP_TO = "TGCAANYRMKSWVHDBtgcaanyrmkswvhdb"
_COMP = str.maketrans(_COMP_FROM, _COMP_TO)


@dataclass
class Hit:
    """One alignment of a query, with reference name and flattened fields."""

    ctg: str
    ctg_start: int
    ctg_end: int
    qry_start: int
    qry_end: int
    blen: int
    mlen: int
    NM: int
    ctg_len: int
    mapq: int
    is_primary: bool
    strand: int  # 1 forward, -1 reverse
    trans_strand: int  # 1 for +, -1 for -, 0 unknown
    seg_id: int
    cigar32: List[int] = field(default_factory=list)

    @property
    def cigar(self) -> List[Tuple[int, int]]:
        """CIGAR as (length, operator) pairs."""
        return [(w >> 4, w & 0xF) for w in self.cigar32]

    @classmethod
    def from_region(cls, index: Index, region: Region) -> "Hit":
        """Build a hit from an aligned region of ``index``."""
        if region.p is None:
            raise ValueError("region carries no alignment details")
        ref = index.seq[region.rid]
        extra = region.p
        if extra.trans_strand == 1:
            trans_strand = 1
        elif extra.trans_strand == 2:
            trans_strand = -1
        else:
            trans_strand = 0
        return cls(
            ctg=ref.name,
            ctg_start=region.rs,
            ctg_end=region.re,
            qry_start=region.qs,
            qry_end=region.qe,
            blen=region.blen,
            mlen=region.mlen,
            NM=region.blen - region.mlen + extra.n_ambi,
            ctg_len=ref.len,
            mapq=region.mapq,
            is_primary=region.id == region.parent,
            strand=-1 if region.rev else 1,
            trans_strand=trans_strand,
            seg_id=region.seg_id,
            cigar32=list(extra.cigar),
        )


def revcomp(seq: Union[str, bytes]) -> str:
    """Return the reverse complement of a nucleotide sequence, keeping case."""
    if isinstance(seq, (bytes, bytearray)):
        seq = bytes(seq).decode("latin-1")
    return seq.translate(_COMP)[::-1]