"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/sampler.py
Pillow-backed sampler: decodes an image and returns a resampled grayscale grid.
"""

import logging

import numpy as np
from PIL import Image

from imgcomp.core.interfaces import Sampler

logger = logging.getLogger(__name__)

# Fingerprints made with different filters are not comparable.
RESAMPLE_FILTER = Image.Resampling.BICUBIC


class DecodeError(Exception):
    """Raised when an image cannot be read or understood."""


class PillowSampler(Sampler):
    """
    Decodes files with Pillow, converts them to 8-bit grayscale ("L") and
    resizes them to the requested grid with RESAMPLE_FILTER.
    """

    def __init__(self, resample: Image.Resampling = RESAMPLE_FILTER):
        self.resample = resample

    def sample(self, path: str, width: int, height: int) -> np.ndarray:
        """
        Returns:
            Integer array of shape (height, width), row-major intensities.

        Raises:
            DecodeError: If the file cannot be decoded
        """
        try:
            with Image.open(path) as img:
                gray = img.convert("L")
                resized = gray.resize((width, height), resample=self.resample)
                grid = np.asarray(resized, dtype=np.int64)
        except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
            logger.debug(f"Could not decode {path}: {e}")
            raise DecodeError(f"Failed to decode {path}: {e}") from e

        return grid
