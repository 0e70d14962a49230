"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for fingerprinting, caching and similarity matching.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple
from enum import Enum

import imagehash


# =============================
# Enums
# =============================

class HashAlgorithm(Enum):
    """
    Fingerprinting algorithm. Each member carries the sampling grid it needs
    and the integer tag under which its fingerprints are cached.
    """
    AVERAGE = "average"
    DIFFERENCE = "difference"
    PERCEPTUAL = "perceptual"

    @property
    def grid_size(self) -> Tuple[int, int]:
        """(width, height) of the grayscale grid requested from the sampler."""
        mapping = {
            HashAlgorithm.AVERAGE: (8, 8),
            HashAlgorithm.DIFFERENCE: (9, 8),
            HashAlgorithm.PERCEPTUAL: (32, 32),
        }
        return mapping[self]

    @property
    def cache_tag(self) -> int:
        # Stored in the `hashtype` column; must never be renumbered.
        mapping = {
            HashAlgorithm.AVERAGE: 0,
            HashAlgorithm.DIFFERENCE: 1,
            HashAlgorithm.PERCEPTUAL: 2,
        }
        return mapping[self]

    @property
    def display_name(self) -> str:
        """Human-readable name for console output."""
        mapping = {
            HashAlgorithm.AVERAGE: "aHash (average)",
            HashAlgorithm.DIFFERENCE: "dHash (difference)",
            HashAlgorithm.PERCEPTUAL: "pHash (perceptual)",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


# ======================
#  Core Data Models
# ======================

@dataclass
class File:
    """
    A candidate image that passed the scanner filters.
    Holds the stat snapshot used to validate cached fingerprints.
    """
    path: str  # as given on the command line
    canonical_path: str  # absolute, symlinks resolved
    size: int  # in bytes
    mtime: int  # whole seconds

    def __repr__(self):
        return f"<File path={self.path}, size={self.size}>"


@dataclass
class HashResult:
    """
    Outcome of hashing one file.

    `decoded` is the only reliable failure signal: a failed decode reports the
    all-ones sentinel, which a real image can also produce.
    """
    fingerprint: imagehash.ImageHash
    decoded: bool = True


@dataclass
class FileHashEntry:
    path: str
    canonical_path: str
    fingerprint: imagehash.ImageHash

    def __repr__(self):
        return f"<FileHashEntry path={self.path}, fingerprint={self.fingerprint}>"


@dataclass
class CacheRecord:
    """One row of the fingerprint cache."""
    canonical_path: str
    algorithm: HashAlgorithm
    fingerprint: imagehash.ImageHash
    file_size: int
    mtime: int


@dataclass
class SimilarPair:
    first: FileHashEntry
    second: FileHashEntry
    distance: int

    def __repr__(self):
        return f"<SimilarPair {self.first.path} ~ {self.second.path}, distance={self.distance}>"


@dataclass
class ComparisonStats:
    """
    Counters collected while a comparison runs.
    """
    candidates: int = 0
    skipped: int = 0
    cache_hits: int = 0
    computed: int = 0
    decode_failures: int = 0
    pairs_reported: int = 0
    total_time: float = 0.0

    @property
    def fingerprinted(self) -> int:
        """Files that ended up with a usable fingerprint."""
        return self.cache_hits + self.computed

    def print_summary(self) -> str:
        lines = [
            "Comparison Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            f"Candidates: {self.candidates}",
            f"Skipped (filtered or unreadable): {self.skipped}",
            f"Cache hits: {self.cache_hits}",
            f"Computed: {self.computed}",
            f"Decode failures: {self.decode_failures}",
            f"Similar pairs: {self.pairs_reported}",
        ]
        return "\n".join(lines)


"""
DTO for comparison parameters with built-in validation.
Interface-agnostic, built by the CLI and consumed by ComparisonCommand.
"""

MIN_TOLERANCE = 0
MAX_TOLERANCE = 64
DEFAULT_TOLERANCE = 5


@dataclass
class ComparisonParams:
    """Parameters for one comparison run."""
    paths: List[str]
    algorithm: HashAlgorithm = HashAlgorithm.DIFFERENCE
    tolerance: int = DEFAULT_TOLERANCE
    print_hashes: bool = False
    cache_path: Optional[str] = None

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.paths:
            raise ValueError("At least one file path is required")

        if isinstance(self.tolerance, bool) or not isinstance(self.tolerance, int):
            raise ValueError(f"Tolerance must be an integer, got {self.tolerance!r}")

        if not MIN_TOLERANCE <= self.tolerance <= MAX_TOLERANCE:
            raise ValueError(
                f"Tolerance must be between {MIN_TOLERANCE} and {MAX_TOLERANCE}, got {self.tolerance}"
            )
