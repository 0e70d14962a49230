"""
Core comparison engine — sampler, hasher, cache, scanner and matcher.

This package contains the algorithmic foundation of imgcomp:
- PillowSampler: decode + grayscale + fixed-filter resampling
- HasherImpl: average, difference and perceptual 64-bit fingerprints
- FingerprintCache: SQLite store keyed on (canonical path, algorithm)
- FileScannerImpl: stat / regular-file / path-length / extension filters
- SimilarityMatcher: all-pairs Hamming-distance scan
- Models: File, FileHashEntry, CacheRecord, SimilarPair and run parameters

All components are pure Python with no UI dependencies.
"""

from .models import (
    HashAlgorithm, File, HashResult, FileHashEntry, CacheRecord, SimilarPair,
    ComparisonStats, ComparisonParams)
from .sampler import PillowSampler, DecodeError
from .hasher import HasherImpl
from .cache import FingerprintCache, CacheError
from .scanner import FileScannerImpl, IMAGE_EXTENSIONS
from .matcher import SimilarityMatcher

__all__ = [
    "HashAlgorithm",
    "File",
    "HashResult",
    "FileHashEntry",
    "CacheRecord",
    "SimilarPair",
    "ComparisonStats",
    "ComparisonParams",
    "PillowSampler",
    "DecodeError",
    "HasherImpl",
    "FingerprintCache",
    "CacheError",
    "FileScannerImpl",
    "IMAGE_EXTENSIONS",
    "SimilarityMatcher",
]
