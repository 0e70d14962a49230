"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the comparison pipeline.

Key Components:
---------------
- Sampler: decodes a file into a resampled grayscale grid.
- Hasher: turns a file into a 64-bit fingerprint for a given algorithm.
- FingerprintStore: persistent (path, algorithm) -> fingerprint mapping.
- FileScanner: filters input paths down to hashable candidates.
"""

from typing import Protocol, Iterable, Iterator, Optional

import imagehash
import numpy as np

from imgcomp.core.models import File, HashAlgorithm, HashResult, CacheRecord


# ===== Interfaces =====

class Sampler(Protocol):
    """Decodes an image and returns `height` rows of `width` intensity samples."""
    def sample(self, path: str, width: int, height: int) -> np.ndarray: ...


class Hasher(Protocol):
    """Interface for fingerprinting a single file."""
    def compute(self, path: str, algorithm: HashAlgorithm) -> HashResult: ...


class FingerprintStore(Protocol):
    """
    Interface for the fingerprint cache.

    Methods:
        lookup: Exact match on canonical path and algorithm.
        upsert: Insert, or overwrite the existing record for the same key.
        close: Release the underlying storage.
    """
    def lookup(self, canonical_path: str, algorithm: HashAlgorithm) -> Optional[CacheRecord]: ...

    def upsert(
        self,
        canonical_path: str,
        algorithm: HashAlgorithm,
        fingerprint: imagehash.ImageHash,
        size: int,
        mtime: int
    ) -> None: ...

    def close(self) -> None: ...


class FileScanner(Protocol):
    """
    Interface for turning raw input paths into candidate files.
    """
    def scan(self, paths: Iterable[str]) -> Iterator[File]:
        """
        Yield candidates lazily, in input order.

        Args:
            paths: Paths as given by the user.

        Returns:
            Iterator over File objects that passed all filters.
        """
        ...
