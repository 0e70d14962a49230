"""
Unified command orchestrator for image comparison.
This is the single source of truth for the run logic; the CLI only parses
arguments and prints results.
"""
import time
import logging
from typing import Callable, List, Optional, Tuple

from imgcomp.core.cache import CacheError, FingerprintCache
from imgcomp.core.interfaces import FileScanner, FingerprintStore, Hasher
from imgcomp.core.hasher import HasherImpl
from imgcomp.core.matcher import SimilarityMatcher
from imgcomp.core.models import (
    ComparisonParams, ComparisonStats, File, FileHashEntry, SimilarPair
)
from imgcomp.core.scanner import FileScannerImpl
from imgcomp.services.file_service import FileService

logger = logging.getLogger(__name__)


class ComparisonCommand:
    """
    Orchestrates one comparison run:
    1. Open the fingerprint cache
    2. For each candidate file: reuse a valid cached fingerprint, or hash
       the file and store the result
    3. Close the cache and run the similarity scan over all fingerprints

    Files are processed strictly one after another; matching starts only
    once every fingerprint has been collected.

    Usage:
        params = ComparisonParams(paths=[...], tolerance=5)
        command = ComparisonCommand()
        pairs, stats = command.execute(params)
    """

    def __init__(
            self,
            hasher: Optional[Hasher] = None,
            scanner: Optional[FileScanner] = None,
            cache_factory: Optional[Callable[[str], FingerprintStore]] = None
    ):
        self.hasher = hasher or HasherImpl()
        self.scanner = scanner or FileScannerImpl()
        self.cache_factory = cache_factory or FingerprintCache

    def execute(
            self,
            params: ComparisonParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            hash_callback: Optional[Callable[[FileHashEntry], None]] = None
    ) -> Tuple[List[SimilarPair], ComparisonStats]:
        """
        Execute a comparison with the given parameters.

        Args:
            params: Validated comparison parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None
            hash_callback: Called with every fingerprinted file, in input order

        Returns:
            Tuple of (similar_pairs, statistics)

        Raises:
            CacheError: If the cache cannot be opened, read or written
        """
        start_time = time.time()
        stats = ComparisonStats()

        cache_path = params.cache_path or str(FileService.default_cache_path())
        entries = self.collect_fingerprints(
            params, cache_path, stats, progress_callback, hash_callback
        )

        if progress_callback:
            progress_callback("matching", 0, len(entries))

        matcher = SimilarityMatcher(params.tolerance)
        pairs = matcher.find_similar(entries)
        stats.pairs_reported = len(pairs)
        stats.total_time = time.time() - start_time

        logger.info(
            f"Compared {stats.fingerprinted} files, {stats.pairs_reported} similar pairs "
            f"(tolerance {params.tolerance})"
        )
        return pairs, stats

    def collect_fingerprints(
            self,
            params: ComparisonParams,
            cache_path: str,
            stats: ComparisonStats,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            hash_callback: Optional[Callable[[FileHashEntry], None]] = None
    ) -> List[FileHashEntry]:
        """Build the ordered fingerprint list for all candidate files."""
        entries: List[FileHashEntry] = []
        total = len(params.paths)

        cache = self.cache_factory(cache_path)
        try:
            for file in self.scanner.scan(params.paths):
                stats.candidates += 1
                entry = self._fingerprint_file(file, params, cache, stats)
                if entry is not None:
                    entries.append(entry)
                    if hash_callback:
                        hash_callback(entry)
                if progress_callback:
                    progress_callback("hashing", stats.candidates, total)
        except BaseException:
            self._close_after_error(cache)
            raise
        cache.close()

        stats.skipped = total - stats.candidates
        return entries

    @staticmethod
    def _close_after_error(cache: FingerprintStore) -> None:
        """Close the cache while another exception propagates; never replace it."""
        try:
            cache.close()
        except CacheError as e:
            logger.error(f"Failed to close fingerprint cache: {e}")

    def _fingerprint_file(
            self,
            file: File,
            params: ComparisonParams,
            cache: FingerprintStore,
            stats: ComparisonStats
    ) -> Optional[FileHashEntry]:
        """
        Cached fingerprint if still valid, otherwise a fresh one.
        Returns None when the file cannot be decoded.
        """
        record = cache.lookup(file.canonical_path, params.algorithm)
        if record is not None and FingerprintCache.is_valid(record, file.size, file.mtime):
            stats.cache_hits += 1
            logger.debug(f"Cache hit: {file.path}")
            return FileHashEntry(
                path=file.path,
                canonical_path=file.canonical_path,
                fingerprint=record.fingerprint,
            )

        result = self.hasher.compute(file.path, params.algorithm)
        if not result.decoded:
            stats.decode_failures += 1
            return None

        stats.computed += 1
        cache.upsert(
            file.canonical_path, params.algorithm, result.fingerprint, file.size, file.mtime
        )
        return FileHashEntry(
            path=file.path,
            canonical_path=file.canonical_path,
            fingerprint=result.fingerprint,
        )
