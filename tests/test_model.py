import pytest

from mmkit.model import (
    CIGAR_STR,
    IDX_MAGIC,
    CigarOp,
    Extra,
    IdxOpt,
    IdxSeq,
    Index,
    IndexFlag,
    MapFlag,
    MapOpt,
    Region,
    cigar_op_char,
)


def test_cigar_op_chars_follow_cigar_string():
    assert cigar_op_char(CigarOp.MATCH) == "M"
    assert cigar_op_char(CigarOp.EQ_MATCH) == "="
    assert cigar_op_char(CigarOp.X_MISMATCH) == "X"
    assert "".join(cigar_op_char(i) for i in range(len(CIGAR_STR))) == "MIDNSHP=XB"


@pytest.mark.parametrize("op", [-1, 10, 100])
def test_cigar_op_char_rejects_unknown(op):
    with pytest.raises(ValueError):
        cigar_op_char(op)


def test_map_flag_values():
    opt = MapOpt(flag=MapFlag.CIGAR | MapFlag.OUT_SAM)
    assert opt.flag == 0x004 | 0x008
    assert MapFlag.CIGAR in opt.flag
    assert MapFlag.SPLICE not in opt.flag
    assert MapOpt(flag=MapFlag.NO_HASH_NAME).flag == 0x400000000


def test_index_flag_and_magic():
    opt = IdxOpt(flag=IndexFlag.HPC | IndexFlag.NO_SEQ)
    assert opt.flag == 0x3
    assert IndexFlag.NO_NAME not in opt.flag
    assert IDX_MAGIC == b"MMI\x02"


def test_index_n_seq_tracks_sequences():
    idx = Index(k=15, w=10)
    assert idx.n_seq == 0
    idx.seq.append(IdxSeq(name="chr1", len=100))
    idx.seq.append(IdxSeq(name="chr2", len=50))
    assert idx.n_seq == 2
    assert [s.name for s in idx.seq] == ["chr1", "chr2"]


def test_extra_n_cigar():
    extra = Extra(cigar=[(5 << 4) | CigarOp.MATCH, (2 << 4) | CigarOp.INS])
    assert extra.n_cigar == 2
    assert extra.capacity == extra.n_cigar


def test_extra_rejects_bad_trans_strand():
    with pytest.raises(ValueError):
        Extra(trans_strand=4)


def test_region_primary():
    assert Region(id=3, parent=3).is_primary
    assert not Region(id=3, parent=1).is_primary


@pytest.mark.parametrize("kwargs", [{"mapq": 256}, {"split": 4}, {"seg_id": -1}])
def test_region_rejects_out_of_range_bitfields(kwargs):
    with pytest.raises(ValueError):
        Region(**kwargs)


def test_options_defaults_and_independence():
    a = MapOpt()
    b = MapOpt(flag=MapFlag.SR)
    assert a.flag == MapFlag(0)
    assert a.split_prefix is None
    assert MapFlag.SR in b.flag
    assert IdxOpt(k=21).k == 21
    assert IdxOpt().flag == IndexFlag(0)