"""Flags, options and the index, alignment and hit records used for mapping."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from typing import List, Optional

IDX_MAGIC = b"MMI\x02"
MAX_SEG = 255
CIGAR_STR = "MIDNSHP=XB"


class MapFlag(IntFlag):
    """Mapping option flags."""

    NO_DIAG = 0x001  # no exact diagonal hit
    NO_DUAL = 0x002  # skip pairs where query name > target name
    CIGAR = 0x004
    OUT_SAM = 0x008
    NO_QUAL = 0x010
    OUT_CG = 0x020
    OUT_CS = 0x040
    SPLICE = 0x080  # splice mode
    SPLICE_FOR = 0x100  # match GT-AG
    SPLICE_REV = 0x200  # match CT-AC
    NO_LJOIN = 0x400
    OUT_CS_LONG = 0x800
    SR = 0x1000
    FRAG_MODE = 0x2000
    NO_PRINT_2ND = 0x4000
    TWO_IO_THREADS = 0x8000
    LONG_CIGAR = 0x10000
    INDEPEND_SEG = 0x20000
    SPLICE_FLANK = 0x40000
    SOFTCLIP = 0x80000
    FOR_ONLY = 0x100000
    REV_ONLY = 0x200000
    HEAP_SORT = 0x400000
    ALL_CHAINS = 0x800000
    OUT_MD = 0x1000000
    COPY_COMMENT = 0x2000000
    EQX = 0x4000000  # use =/X instead of M
    PAF_NO_HIT = 0x8000000  # output unmapped reads to PAF
    NO_END_FLT = 0x10000000
    HARD_MLEVEL = 0x20000000
    SAM_HIT_ONLY = 0x40000000
    RMQ = 0x80000000
    QSTRAND = 0x100000000
    NO_INV = 0x200000000
    NO_HASH_NAME = 0x400000000


class IndexFlag(IntFlag):
    """Index construction flags."""

    HPC = 0x1
    NO_SEQ = 0x2
    NO_NAME = 0x4


class CigarOp(IntEnum):
    """CIGAR operators in BAM encoding order."""

    MATCH = 0
    INS = 1
    DEL = 2
    N_SKIP = 3
    SOFTCLIP = 4
    HARDCLIP = 5
    PADDING = 6
    EQ_MATCH = 7
    X_MISMATCH = 8


def cigar_op_char(op: int) -> str:
    """Return the CIGAR letter for operator code ``op``."""
    value = int(op)
    if not 0 <= value < len(CIGAR_STR):
        raise ValueError(f"unknown CIGAR operator: {value}")
    return CIGAR_STR[value]


def _check_bits(name: str, value: int, bits: int) -> None:
    if not 0 <= value < (1 << bits):
        raise ValueError(f"{name}={value} does not fit in {bits} bits")


@dataclass
class IdxSeq:
    """Name, offset in the packed sequence, and length of one reference sequence."""

    name: str
    offset: int = 0
    len: int = 0
    is_alt: bool = False


@dataclass
class Index:
    """A minimizer index: parameters, reference sequences and packed bases."""

    b: int = 0
    w: int = 0
    k: int = 0
    flag: IndexFlag = IndexFlag(0)
    index: int = 0
    n_alt: int = 0
    seq: List[IdxSeq] = field(default_factory=list)
    S: List[int] = field(default_factory=list)  # 4-bit packed sequence

    @property
    def n_seq(self) -> int:
        """Number of reference sequences."""
        return len(self.seq)


@dataclass
class Extra:
    """Alignment details attached to a region: DP scores and CIGAR."""

    dp_score: int = 0
    dp_max: int = 0
    dp_max2: int = 0
    n_ambi: int = 0
    trans_strand: int = 0  # 0 unknown, 1 for +, 2 for -
    cigar: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        _check_bits("n_ambi", self.n_ambi, 30)
        _check_bits("trans_strand", self.trans_strand, 2)

    @property
    def n_cigar(self) -> int:
        """Number of CIGAR operations."""
        return len(self.cigar)

    @property
    def capacity(self) -> int:
        """Capacity of the CIGAR array; equal to its length here."""
        return len(self.cigar)


@dataclass
class Region:
    """One mapping of a query onto a reference sequence."""

    id: int = 0
    cnt: int = 0
    rid: int = 0
    score: int = 0
    qs: int = 0
    qe: int = 0
    rs: int = 0
    re: int = 0
    parent: int = 0
    subsc: int = 0
    as_: int = 0
    mlen: int = 0
    blen: int = 0
    n_sub: int = 0
    score0: int = 0
    mapq: int = 0
    split: int = 0
    rev: bool = False
    inv: bool = False
    sam_pri: bool = False
    proper_frag: bool = False
    pe_thru: bool = False
    seg_split: bool = False
    seg_id: int = 0
    split_inv: bool = False
    is_alt: bool = False
    strand_retained: bool = False
    hash: int = 0
    div: float = 0.0
    p: Optional[Extra] = None

    def __post_init__(self) -> None:
        _check_bits("mapq", self.mapq, 8)
        _check_bits("split", self.split, 2)
        _check_bits("seg_id", self.seg_id, 8)

    @property
    def is_primary(self) -> bool:
        """True if this region is its own parent."""
        return self.id == self.parent


@dataclass
class IdxOpt:
    """Indexing options."""

    k: int = 0
    w: int = 0
    flag: IndexFlag = IndexFlag(0)
    bucket_bits: int = 0
    mini_batch_size: int = 0
    batch_size: int = 0


@dataclass
class MapOpt:
    """Mapping options."""

    flag: MapFlag = MapFlag(0)
    seed: int = 0
    sdust_thres: int = 0
    max_qlen: int = 0
    bw: int = 0
    bw_long: int = 0
    max_gap: int = 0
    max_gap_ref: int = 0
    max_frag_len: int = 0
    max_chain_skip: int = 0
    max_chain_iter: int = 0
    min_cnt: int = 0
    min_chain_score: int = 0
    chain_gap_scale: float = 0.0
    chain_skip_scale: float = 0.0
    rmq_size_cap: int = 0
    rmq_inner_dist: int = 0
    rmq_rescue_size: int = 0
    rmq_rescue_ratio: float = 0.0
    mask_level: float = 0.0
    mask_len: int = 0
    pri_ratio: float = 0.0
    best_n: int = 0
    alt_drop: float = 0.0
    a: int = 0
    b: int = 0
    q: int = 0
    e: int = 0
    q2: int = 0
    e2: int = 0
    sc_ambi: int = 0
    noncan: int = 0
    junc_bonus: int = 0
    zdrop: int = 0
    zdrop_inv: int = 0
    end_bonus: int = 0
    min_dp_max: int = 0
    min_ksw_len: int = 0
    anchor_ext_len: int = 0
    anchor_ext_shift: int = 0
    max_clip_ratio: float = 0.0
    rank_min_len: int = 0
    rank_frac: float = 0.0
    pe_ori: int = 0
    pe_bonus: int = 0
    mid_occ_frac: float = 0.0
    q_occ_frac: float = 0.0
    min_mid_occ: int = 0
    max_mid_occ: int = 0
    mid_occ: int = 0
    max_occ: int = 0
    max_max_occ: int = 0
    occ_dist: int = 0
    mini_batch_size: int = 0
    max_sw_mat: int = 0
    cap_kalloc: int = 0
    split_prefix: Optional[str] = None