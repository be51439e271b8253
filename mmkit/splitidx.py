"""Temporary files holding the sequence names and lengths of index parts."""

from __future__ import annotations

import contextlib
import os
import struct
from typing import BinaryIO, List, Tuple

from .model import IdxSeq, Index

_U32 = struct.Struct("<I")


def split_path(prefix: str, index: int) -> str:
    """Return the temporary file name for index part ``index``."""
    sign = "-" if index < 0 else ""
    return f"{prefix}.{sign}{abs(index):04d}.tmp"


def _write_u32(fp: BinaryIO, value: int) -> None:
    if not 0 <= value <= 0xFFFFFFFF:
        raise ValueError(f"value does not fit in 32 bits: {value}")
    fp.write(_U32.pack(value))


def _read_exact(fp: BinaryIO, n: int) -> bytes:
    data = fp.read(n)
    if len(data) != n:
        raise EOFError(f"{getattr(fp, 'name', 'file')}: expected {n} bytes, got {len(data)}")
    return data


def _read_u32(fp: BinaryIO) -> int:
    return _U32.unpack(_read_exact(fp, 4))[0]


def split_init(prefix: str, index: Index) -> BinaryIO:
    """Create the temporary file of an index part and write its sequence table.

    Returns the file, open for writing, positioned after the table.
    """
    fp = open(split_path(prefix, index.index), "wb")
    try:
        _write_u32(fp, index.k)
        _write_u32(fp, index.n_seq)
        for s in index.seq:
            name = s.name.encode("utf-8")
            _write_u32(fp, len(name))
            fp.write(name)
            _write_u32(fp, s.len)
    except BaseException:
        fp.close()
        raise
    return fp


def split_merge_prep(prefix: str, n_splits: int) -> Tuple[Index, List[BinaryIO], List[int]]:
    """Open the temporary files of all parts and merge their sequence tables.

    Returns the merged index, the open files positioned after their tables,
    and the number of sequences in each part.
    """
    if n_splits < 1:
        raise ValueError(f"n_splits must be at least 1, got {n_splits}")
    files: List[BinaryIO] = []
    try:
        for i in range(n_splits):
            files.append(open(split_path(prefix, i), "rb"))
        merged = Index()
        n_seq_part: List[int] = []
        for fp in files:
            merged.k = _read_u32(fp)
            n_seq_part.append(_read_u32(fp))
        for fp, n in zip(files, n_seq_part):
            for _ in range(n):
                length = _read_u32(fp)
                name = _read_exact(fp, length).decode("utf-8")
                merged.seq.append(IdxSeq(name=name, len=_read_u32(fp)))
    except BaseException:
        for fp in files:
            fp.close()
        raise
    return merged, files, n_seq_part


def split_rm_tmp(prefix: str, n_splits: int) -> None:
    """Delete the temporary files of all parts, ignoring ones that are gone."""
    for i in range(n_splits):
        with contextlib.suppress(OSError):
            os.remove(split_path(prefix, i))