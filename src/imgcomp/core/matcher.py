"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/matcher.py
All-pairs Hamming-distance scan over fingerprinted files.
"""

import logging
from collections import deque
from typing import Iterator, List

from imgcomp.core.fingerprint import hamming_distance
from imgcomp.core.models import FileHashEntry, SimilarPair, MIN_TOLERANCE, MAX_TOLERANCE

logger = logging.getLogger(__name__)


class SimilarityMatcher:
    """
    Reports every unordered pair whose distance is strictly below the tolerance.

    Pairs come out in scan order: outer index ascending, then inner index
    ascending. No sorting or indexing, so the scan is O(n^2).
    """

    def __init__(self, tolerance: int):
        if not MIN_TOLERANCE <= tolerance <= MAX_TOLERANCE:
            raise ValueError(
                f"Tolerance must be between {MIN_TOLERANCE} and {MAX_TOLERANCE}, got {tolerance}"
            )
        self.tolerance = tolerance

    def iter_similar(self, entries: List[FileHashEntry]) -> Iterator[SimilarPair]:
        """
        Consume `entries` front to back, yielding similar pairs.

        Each entry is dropped once it has been compared against all later
        entries; the list is empty when the iterator is exhausted.
        """
        pending = deque(entries)
        entries.clear()
        comparisons = 0

        while pending:
            current = pending.popleft()
            for other in pending:
                distance = hamming_distance(current.fingerprint, other.fingerprint)
                comparisons += 1
                if distance < self.tolerance:
                    logger.debug(f"{current.path} ~ {other.path} (distance: {distance})")
                    yield SimilarPair(first=current, second=other, distance=distance)

        logger.debug(f"Matching done after {comparisons} comparisons")

    def find_similar(self, entries: List[FileHashEntry]) -> List[SimilarPair]:
        """List form of iter_similar. Empties `entries`."""
        return list(self.iter_similar(entries))
