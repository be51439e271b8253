# mmkit

Pure-Python building blocks for minimizer-based sequence mapping tools. The
package has no third-party dependencies.

## Modules

### `mmkit.fastx`

This module is a streaming FASTA/FASTQ parser.

- `read_fastx(stream)` yields `FastxRecord` objects from a binary stream. Each
  record has `name`, `comment`, `seq` and `qual`. For FASTA records `qual` is
  `None`. FASTA and FASTQ records may be mixed in one stream.
- `FastxReader(stream)` reads one record at a time with `read()`, which returns
  `None` at end of input. The reader is also iterable. `read()` raises
  `TruncatedQualityError`, a subclass of `ValueError`, when a FASTQ quality
  string is missing or its length differs from the sequence length.
- `ByteStream(stream, bufsize=16384)` is the buffered tokenizer underneath.
  - `getc()` returns the next byte, or `None` at end of stream.
  - `get_until(delimiter)` returns `(data, found)`. `found` is the delimiter
    byte that ended the read, or `None` if the stream ended first. The call
    returns `None` once the stream is exhausted.
  - `eof()` reports whether the stream is exhausted.

  `Separator` selects how `get_until` splits the input:

  | Value | Stops at |
  | --- | --- |
  | `SPACE` | any whitespace |
  | `TAB` | whitespace other than a space |
  | `LINE` | a newline; a trailing `\r` is dropped |
  | any value from 3 to 255 | that literal byte |

### `mmkit.ksort`

This module sorts and selects on mutable sequences in place.

- `heap_make(values)` and `heap_down(values, i, n)` build and maintain a max-heap.
- `ksmall(values, k)` returns the k-th smallest item (0-based). It reorders
  `values` partly. It raises `IndexError` when `k` is out of range.
- `insertion_sort(values, key=None)` is a stable insertion sort.
- `radix_sort(values, key=None, key_bytes=8)` is an MSD radix sort on an
  unsigned integer key. It falls back to insertion sort for small inputs.

### `mmkit.model`

This module holds the mapping data model.

- `Index` holds the sequence table. `IdxSeq` is one entry in it.
- `Region` is one mapping, and `Extra` holds its alignment details.
- `IdxOpt` and `MapOpt` are the indexing and mapping option sets.
- `MapFlag` and `IndexFlag` are flag enums.
- `CigarOp` lists the CIGAR operators. `cigar_op_char(op)` returns the letter
  for an operator.

Bit-field members are range-checked on construction. Out-of-range values raise
`ValueError`.

### `mmkit.packing`

- `seq4_set(s, i, c)` and `seq4_get(s, i)` write and read 4-bit codes packed
  eight to a 32-bit word.
- `SeedFlag` and `seed_segment(x)` decode anchor flag bits and segment ids.
- `Seed` and `Segment` are plain records.
- `mg_log2(x)` is a single-precision approximation of `log2`. It raises
  `ValueError` for non-positive or non-finite input.

### `mmkit.cigar`

This module builds BAM-encoded CIGARs. Each entry is `length << 4 | op`.

- `push_cigar(cigar, op, length)` appends an operation and merges it with the
  previous one when the operator is the same.
- `backtrack(p, off, off_end, n_col, i0, j0, is_rot=False, is_rev=False, min_intron_len=0)`
  traces a banded dynamic-programming backtrack matrix into a CIGAR.
- `ExtensionResult` holds extension scores. `reset()` clears them, and
  `apply_zdrop(...)` tracks the maximum and detects a Z-drop.
- `EzFlag` lists the extension option flags.

### `mmkit.splitidx`

This module handles the temporary files that record the sequence names and
lengths of each part when an index is built in parts. The files are named by
`split_path(prefix, index)`, for example `prefix.0003.tmp`.

- `split_init(prefix, index)` writes the file for one part and returns it open.
- `split_merge_prep(prefix, n_splits)` opens all parts and returns three things:
  - the merged `Index`,
  - the open files, positioned after their tables,
  - the number of sequences in each part.
- `split_rm_tmp(prefix, n_splits)` deletes the files.

### `mmkit.hits`

- `Hit.from_region(index, region)` flattens an aligned `Region` into a
  user-facing record. The record has the reference name and length,
  coordinates, strand, MAPQ and NM, and the CIGAR both as `cigar32` and as
  `(length, op)` pairs.
- `revcomp(seq)` reverse-complements a `str` or `bytes` sequence and keeps the
  case. IUPAC ambiguity codes are complemented too.

## What it does not do

The package has no command-line program. It does not build or load minimizer
indexes, compute minimizers, chain seeds, run alignment dynamic programming or
write PAF/SAM output. It provides the data structures and helper routines that
such a tool is built from.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
import io
from mmkit.fastx import read_fastx
from mmkit.hits import revcomp

data = b">r1 first read\nACGT\nGG\n@r2\nTTAA\n+\nIIII\n"
for record in read_fastx(io.BytesIO(data)):
    print(record.name, record.seq, revcomp(record.seq))
# r1 ACGTGG CCACGT
# r2 TTAA TTAA
```