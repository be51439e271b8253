"""FASTA/FASTQ parsing, sorting, CIGAR backtracking, index split files and hit records for sequence mapping."""

__version__ = "0.1.0"

__all__ = ["cigar", "fastx", "hits", "ksort", "model", "packing", "splitidx"]