"""
imgcomp — find visually similar images with perceptual hashing.

Core features:
- Three fingerprinting algorithms: average (aHash), difference (dHash), perceptual (pHash)
- Persistent SQLite fingerprint cache validated by file size and modification time
- All-pairs Hamming-distance matching with a configurable tolerance
- CLI interface for headless usage
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("imgcomp")
except Exception:
    __version__ = "0.0.0"

# Public API — only what users should import directly
from imgcomp.commands import ComparisonCommand
from imgcomp.core import (
    ComparisonParams, ComparisonStats, HashAlgorithm, FileHashEntry, SimilarPair,
    FingerprintCache, CacheError, HasherImpl, SimilarityMatcher,
)
from imgcomp.utils.convert_utils import ConvertUtils
from imgcomp.services.file_service import FileService

__all__ = [
    "ComparisonCommand",
    "ComparisonParams",
    "ComparisonStats",
    "HashAlgorithm",
    "FileHashEntry",
    "SimilarPair",
    "FingerprintCache",
    "CacheError",
    "HasherImpl",
    "SimilarityMatcher",
    "ConvertUtils",
    "FileService",
    "__version__",
]
