"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Filters the paths given on the command line down to hashable image candidates.
Features:
- Keeps input order and yields lazily, so files are processed one at a time
- Skips paths that cannot be stat'ed, are not regular files or are too long
- Applies the case-insensitive image extension allow-list
- Does not descend into directories
"""

import os
import stat
import logging
from typing import Iterable, Iterator, List, Optional

logger = logging.getLogger(__name__)

# Local imports
from imgcomp.core.models import File
from imgcomp.core.interfaces import FileScanner
from imgcomp.services.file_service import FileService

IMAGE_EXTENSIONS = [
    ".jpeg", ".jpg", ".png", ".gif", ".tiff", ".tif", ".webp", ".jxl", ".bmp", ".avif",
]


class FileScannerImpl(FileScanner):
    """
    Turns raw input paths into File candidates.

    Attributes:
        extensions: Allowed extensions, lowercase with leading dot
        max_path_length: Longest accepted path, defaults to the platform limit
    """

    def __init__(
        self,
        extensions: Optional[List[str]] = None,
        max_path_length: Optional[int] = None
    ):
        self.extensions = [ext.lower() for ext in (extensions or IMAGE_EXTENSIONS)]
        self.max_path_length = max_path_length or FileService.path_max()

    def scan(self, paths: Iterable[str]) -> Iterator[File]:
        """
        Yield a File for every path that passes all filters, in input order.
        """
        for path in paths:
            file = self._process_file(path)
            if file is not None:
                yield file

    def _process_file(self, path: str) -> Optional[File]:
        """
        Process an individual path and return a File if it passes all filters.
        Args:
            path: Path as given by the user
        Returns:
            Optional[File]: File object if it passes filters, else None
        """
        try:
            stat_result = os.stat(path)
        except (OSError, ValueError) as e:
            logger.debug(f"Could not stat {path}: {e}")
            return None

        if stat.S_ISDIR(stat_result.st_mode):
            logger.debug(f"Skipping directory: {path}")
            return None

        if not stat.S_ISREG(stat_result.st_mode):
            logger.debug(f"Skipping non-regular file: {path}")
            return None

        if len(path) > self.max_path_length:
            logger.debug(f"Skipping {path} (path longer than {self.max_path_length})")
            return None

        if not self._extension_passes(path):
            logger.debug(f"Skipping {path} (extension not allowed)")
            return None

        try:
            canonical_path = FileService.canonical_path(path)
        except OSError as e:
            logger.debug(f"Could not resolve {path}: {e}")
            return None

        logger.debug(f"Accepted file: {path} ({stat_result.st_size} bytes)")
        return File(
            path=path,
            canonical_path=canonical_path,
            size=stat_result.st_size,
            mtime=FileService.mtime_seconds(stat_result),
        )

    def _extension_passes(self, path: str) -> bool:
        """
        Check if the path ends in one of the allowed extensions (any case).
        Everything from the last dot of the file name counts, so a file
        named ".jpg" is a jpg.
        """
        name = os.path.basename(path)
        dot = name.rfind(".")
        if dot < 0:
            return False
        return name[dot:].lower() in self.extensions
