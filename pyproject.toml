[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mmkit"
version = "0.1.0"
description = "Building blocks for minimizer-based sequence mapping: FASTA/FASTQ parsing, sorting helpers, CIGAR backtracking and index split files"
requires-python = ">=3.10"
dependencies = []
keywords = ["bioinformatics", "fasta", "fastq", "cigar", "alignment", "minimizer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mmkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
