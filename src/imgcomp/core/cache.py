"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/cache.py
SQLite-backed fingerprint cache keyed on (canonical path, algorithm).

A record stays usable while the file's size and modification time match the
stored values. Stale records are overwritten in place, never duplicated, and
nothing is ever deleted. Any storage error is raised as CacheError.
"""

import sqlite3
import logging
from pathlib import Path
from typing import Optional

import imagehash

from imgcomp.core.fingerprint import from_hex, to_hex
from imgcomp.core.interfaces import FingerprintStore
from imgcomp.core.models import CacheRecord, HashAlgorithm

logger = logging.getLogger(__name__)


class CacheError(RuntimeError):
    """Raised for any storage-layer failure (I/O, corruption, schema mismatch)."""


_SCHEMA = """
CREATE TABLE IF NOT EXISTS hashes(
    id INTEGER PRIMARY KEY,
    filepath TEXT,
    hashtype INT,
    hash TEXT,
    filesize INT,
    mtime INT
);
CREATE INDEX IF NOT EXISTS idx_hashes_key ON hashes(filepath, hashtype);
"""


class FingerprintCache(FingerprintStore):
    """
    Persistent fingerprint store. Open once per run; the SQL texts are
    constants so sqlite3 reuses its prepared statements for every file.
    """

    SELECT_SQL = "SELECT hash, filesize, mtime FROM hashes WHERE filepath = ? AND hashtype = ?"
    UPDATE_SQL = "UPDATE hashes SET hash = ?, filesize = ?, mtime = ? WHERE filepath = ? AND hashtype = ?"
    INSERT_SQL = "INSERT INTO hashes (id, filepath, hashtype, hash, filesize, mtime) VALUES (NULL, ?, ?, ?, ?, ?)"

    def __init__(self, db_path: str):
        self.db_path = Path(db_path)
        self._conn: Optional[sqlite3.Connection] = None
        try:
            # Autocommit: every upsert is durable as soon as it returns
            self._conn = sqlite3.connect(str(self.db_path), isolation_level=None)
            self._conn.executescript(_SCHEMA)
            self._conn.execute("PRAGMA synchronous = OFF")
            self._conn.execute("PRAGMA journal_mode = MEMORY")
        except sqlite3.Error as e:
            self.close()
            raise CacheError(f"Cannot open cache {self.db_path}: {e}") from e
        logger.debug(f"Opened fingerprint cache: {self.db_path}")

    def __enter__(self) -> "FingerprintCache":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise CacheError("Cache is closed")
        return self._conn

    def lookup(self, canonical_path: str, algorithm: HashAlgorithm) -> Optional[CacheRecord]:
        """Return the record for this exact (path, algorithm) pair, if any."""
        try:
            row = self.connection.execute(
                self.SELECT_SQL, (canonical_path, algorithm.cache_tag)
            ).fetchone()
        except sqlite3.Error as e:
            raise CacheError(f"Cache lookup failed for {canonical_path}: {e}") from e

        if row is None:
            return None

        stored_hash, file_size, mtime = row
        try:
            fingerprint = from_hex(stored_hash)
            return CacheRecord(
                canonical_path=canonical_path,
                algorithm=algorithm,
                fingerprint=fingerprint,
                file_size=int(file_size),
                mtime=int(mtime),
            )
        except (TypeError, ValueError) as e:
            raise CacheError(f"Corrupt cache record for {canonical_path}: {e}") from e

    @staticmethod
    def is_valid(record: CacheRecord, size: int, mtime: int) -> bool:
        """True if the file still has the size and mtime the record was made from."""
        return record.file_size == size and record.mtime == mtime

    def upsert(
        self,
        canonical_path: str,
        algorithm: HashAlgorithm,
        fingerprint: imagehash.ImageHash,
        size: int,
        mtime: int
    ) -> None:
        """Insert a record, or overwrite fingerprint/size/mtime of the existing one."""
        hex_hash = to_hex(fingerprint)
        tag = algorithm.cache_tag
        try:
            cursor = self.connection.execute(
                self.UPDATE_SQL, (hex_hash, size, mtime, canonical_path, tag)
            )
            if cursor.rowcount == 0:
                self.connection.execute(
                    self.INSERT_SQL, (canonical_path, tag, hex_hash, size, mtime)
                )
                logger.debug(f"Cached new {algorithm.value} hash for {canonical_path}")
            else:
                logger.debug(f"Refreshed {algorithm.value} hash for {canonical_path}")
        except sqlite3.Error as e:
            raise CacheError(f"Cache write failed for {canonical_path}: {e}") from e

    def count(self) -> int:
        """Number of stored records."""
        try:
            return self.connection.execute("SELECT COUNT(*) FROM hashes").fetchone()[0]
        except sqlite3.Error as e:
            raise CacheError(f"Cache query failed: {e}") from e

    def close(self) -> None:
        if self._conn is not None:
            try:
                self._conn.close()
            except sqlite3.Error as e:
                raise CacheError(f"Cannot close cache {self.db_path}: {e}") from e
            finally:
                self._conn = None
