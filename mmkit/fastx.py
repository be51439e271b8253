"""Buffered byte streams and a FASTA/FASTQ record reader."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import IO, Iterator, Optional, Tuple, Union

DEFAULT_BUFSIZE = 16384


class Separator(IntEnum):
    """Special delimiters understood by :meth:`ByteStream.get_until`.

    Any other delimiter value (3..255) is taken as a literal byte.
    """

    SPACE = 0  # any of ' ', \t, \n, \v, \f, \r
    TAB = 1  # any whitespace except ' '
    LINE = 2  # '\n'; a trailing '\r' is dropped


_SPACE_RE = re.compile(rb"[ \t\n\v\f\r]")
_TAB_RE = re.compile(rb"[\t\n\v\f\r]")

_NL = ord("\n")
_CR = ord("\r")
_PLUS = ord("+")
_HEADER = frozenset(b">@")
_SEQ_STOP = frozenset(b">+@")


def _normalize_delimiter(delimiter: Union[int, Separator]) -> int:
    value = int(delimiter)
    if not 0 <= value <= 255:
        raise ValueError(f"delimiter out of range: {value}")
    return value


class ByteStream:
    """A buffered reader over a binary stream, reading ``bufsize`` bytes at a time."""

    def __init__(self, stream: IO, bufsize: int = DEFAULT_BUFSIZE) -> None:
        if bufsize <= 0:
            raise ValueError("bufsize must be positive")
        self._stream = stream
        self._bufsize = bufsize
        self._buf = b""
        self._begin = 0
        self._end = 0
        self._is_eof = False

    def _fill(self) -> bool:
        chunk = self._stream.read(self._bufsize)
        if isinstance(chunk, str):
            chunk = chunk.encode("latin-1")
        chunk = chunk or b""
        self._buf = chunk
        self._begin = 0
        self._end = len(chunk)
        if self._end < self._bufsize:
            self._is_eof = True
        return self._end > 0

    def eof(self) -> bool:
        """True once the underlying stream is exhausted and the buffer is empty."""
        return self._is_eof and self._begin >= self._end

    def getc(self) -> Optional[int]:
        """Return the next byte, or None at end of stream."""
        if self.eof():
            return None
        if self._begin >= self._end and not self._fill():
            return None
        c = self._buf[self._begin]
        self._begin += 1
        return c

    def _find(self, delimiter: int) -> int:
        buf, begin, end = self._buf, self._begin, self._end
        if delimiter == Separator.LINE:
            i = buf.find(b"\n", begin, end)
        elif delimiter > Separator.LINE:
            i = buf.find(bytes((delimiter,)), begin, end)
        else:
            pattern = _SPACE_RE if delimiter == Separator.SPACE else _TAB_RE
            match = pattern.search(buf, begin, end)
            i = match.start() if match else -1
        return end if i < 0 else i

    def _get_until(self, delimiter: int, out: bytearray) -> Tuple[bool, Optional[int]]:
        """Append bytes up to ``delimiter`` to ``out``.

        Returns ``(False, None)`` if the stream was already exhausted, otherwise
        ``(True, found)`` where ``found`` is the delimiter byte met, or None.
        """
        if self._begin >= self._end and self._is_eof:
            return False, None
        found: Optional[int] = None
        while True:
            if self._begin >= self._end:
                if self._is_eof or not self._fill():
                    break
            i = self._find(delimiter)
            out += self._buf[self._begin:i]
            self._begin = i + 1
            if i < self._end:
                found = self._buf[i]
                break
        if delimiter == Separator.LINE and len(out) > 1 and out[-1] == _CR:
            del out[-1]
        return True, found

    def get_until(self, delimiter: Union[int, Separator]) -> Optional[Tuple[bytes, Optional[int]]]:
        """Read up to ``delimiter``.

        Returns ``(data, found)``, where ``found`` is the delimiter byte that
        ended the read or None if the stream ended first; returns None if the
        stream was already exhausted.
        """
        out = bytearray()
        ok, found = self._get_until(_normalize_delimiter(delimiter), out)
        if not ok:
            return None
        return bytes(out), found


@dataclass
class FastxRecord:
    """One FASTA or FASTQ record; ``qual`` is None for FASTA."""

    name: str
    comment: str
    seq: str
    qual: Optional[str] = None


class TruncatedQualityError(ValueError):
    """A FASTQ record whose quality string is missing or of the wrong length."""


def _text(data: bytearray) -> str:
    return data.decode("latin-1")


class FastxReader:
    """Reads FASTA and FASTQ records, in any mix, from a binary stream."""

    def __init__(self, stream: IO) -> None:
        self._stream = ByteStream(stream)
        self._last_char: Optional[int] = None

    def read(self) -> Optional[FastxRecord]:
        """Return the next record, or None at end of input.

        Raises TruncatedQualityError for a FASTQ record with a bad quality string.
        """
        ks = self._stream
        if self._last_char is None:
            c = ks.getc()
            while c is not None and c not in _HEADER:
                c = ks.getc()
            if c is None:
                return None
            self._last_char = c

        name = bytearray()
        ok, c = ks._get_until(Separator.SPACE, name)
        if not ok:
            return None
        comment = bytearray()
        if c != _NL:
            ks._get_until(Separator.LINE, comment)

        seq = bytearray()
        c = ks.getc()
        while c is not None and c not in _SEQ_STOP:
            if c != _NL:
                seq.append(c)
                ks._get_until(Separator.LINE, seq)
            c = ks.getc()
        if c is not None and c in _HEADER:
            self._last_char = c
        if c != _PLUS:
            return FastxRecord(_text(name), _text(comment), _text(seq))

        c = ks.getc()
        while c is not None and c != _NL:
            c = ks.getc()
        if c is None:
            raise TruncatedQualityError(f"record {_text(name)!r}: no quality string")
        qual = bytearray()
        while True:
            ok, _ = ks._get_until(Separator.LINE, qual)
            if not ok or len(qual) >= len(seq):
                break
        self._last_char = None
        if len(qual) != len(seq):
            raise TruncatedQualityError(
                f"record {_text(name)!r}: quality length {len(qual)} != sequence length {len(seq)}"
            )
        return FastxRecord(_text(name), _text(comment), _text(seq), _text(qual))

    def __iter__(self) -> Iterator[FastxRecord]:
        while (record := self.read()) is not None:
            yield record


def read_fastx(stream: IO) -> Iterator[FastxRecord]:
    """Yield every FASTA/FASTQ record in ``stream``."""
    yield from FastxReader(stream)