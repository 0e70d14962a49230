"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Filesystem helpers: canonical paths, stat snapshots and the cache location.
"""
import os
import logging
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

CACHE_FILENAME = "imgcomp.sqlite"
DEFAULT_PATH_MAX = 4096


class FileService:
    """
    Stateless filesystem operations shared by the scanner and the pipeline.
    """

    @staticmethod
    def canonical_path(file_path: str) -> str:
        """Absolute path with every symlink resolved."""
        return os.path.realpath(file_path)

    @staticmethod
    def mtime_seconds(stat_result: os.stat_result) -> int:
        """Modification time truncated to whole seconds."""
        return stat_result.st_mtime_ns // 1_000_000_000

    @staticmethod
    def path_max() -> int:
        """Platform path-length limit, or DEFAULT_PATH_MAX where it is unknown."""
        try:
            value = os.pathconf("/", "PC_PATH_MAX")
        except (AttributeError, OSError, ValueError):
            return DEFAULT_PATH_MAX
        return value if value and value > 0 else DEFAULT_PATH_MAX

    @staticmethod
    def cache_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
        """
        $XDG_CACHE_HOME, else $HOME/.cache.

        Raises:
            CacheError: If neither variable is set
        """
        from imgcomp.core.cache import CacheError

        env = os.environ if environ is None else environ
        if env.get("XDG_CACHE_HOME"):
            return Path(env["XDG_CACHE_HOME"])
        if env.get("HOME"):
            return Path(env["HOME"]) / ".cache"
        raise CacheError("Check that $HOME or $XDG_CACHE_HOME is set")

    @staticmethod
    def default_cache_path(environ: Optional[Mapping[str, str]] = None) -> Path:
        """
        Location of the cache database, creating its directory when missing.

        Raises:
            CacheError: If the directory cannot be created or is not a directory
        """
        from imgcomp.core.cache import CacheError

        cache_dir = FileService.cache_dir(environ)
        try:
            cache_dir.mkdir(mode=0o755, parents=True, exist_ok=True)
        except FileExistsError as e:
            raise CacheError(f"Can't access cache directory {cache_dir}: not a directory") from e
        except OSError as e:
            raise CacheError(f"Can't access cache directory {cache_dir}: {e}") from e

        if not cache_dir.is_dir():
            raise CacheError(f"Can't access cache directory {cache_dir}: not a directory")

        return cache_dir / CACHE_FILENAME
