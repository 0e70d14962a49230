"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/hasher.py
Perceptual fingerprinting: average, difference and perceptual hashes.

Every algorithm is a pure bit rule over a grayscale grid. The grid is fetched
with one sampler call whose size comes from HashAlgorithm.grid_size, so the
only per-algorithm code is the rule itself.
"""

import math
import logging
from typing import Callable, Dict, Optional

import numpy as np

from imgcomp.core.fingerprint import from_bits, SENTINEL_FINGERPRINT
from imgcomp.core.interfaces import Hasher, Sampler
from imgcomp.core.models import HashAlgorithm, HashResult
from imgcomp.core.sampler import DecodeError, PillowSampler

logger = logging.getLogger(__name__)

DCT_LENGTH = 1024
DCT_BLOCK = 8
DCT_ROW = 32


def _require_shape(grid: np.ndarray, width: int, height: int) -> np.ndarray:
    grid = np.asarray(grid, dtype=np.int64)
    if grid.shape != (height, width):
        raise ValueError(f"Expected a {width}x{height} grid, got shape {grid.shape}")
    return grid


def average_hash_bits(grid: np.ndarray) -> np.ndarray:
    """
    Bit = sample > integer mean of all 64 samples (truncating division).
    """
    samples = _require_shape(grid, 8, 8).flatten()
    mean = int(samples.sum()) // samples.size
    return samples > mean


def difference_hash_bits(grid: np.ndarray) -> np.ndarray:
    """
    Bit = left sample < right neighbour, for the first 8 of 9 columns per row.
    """
    rows = _require_shape(grid, 9, 8)
    return (rows[:, :-1] < rows[:, 1:]).flatten()


def _dct_indices() -> np.ndarray:
    # 0..7, 32..39, ..., 224..231: the first 8 indices of every group of 32
    return np.array([row * DCT_ROW + col for row in range(DCT_BLOCK) for col in range(DCT_BLOCK)])


def _dct_basis() -> np.ndarray:
    k = _dct_indices().astype(np.float64)[:, None]
    n = np.arange(DCT_LENGTH, dtype=np.float64)[None, :]
    return np.cos(math.pi / DCT_LENGTH * (n + 0.5) * k)


_DCT_BASIS = _dct_basis()


def perceptual_coefficients(grid: np.ndarray) -> np.ndarray:
    """
    One-dimensional cosine transform of the flattened 32x32 grid, evaluated
    only at the 64 retained indices, in retention order.
    """
    samples = _require_shape(grid, 32, 32).flatten().astype(np.float64)
    return _DCT_BASIS @ samples


def perceptual_hash_bits(grid: np.ndarray) -> np.ndarray:
    """
    Bit = coefficient < mean of coefficients 1..63.
    Coefficient 0 is left out of the mean but still emits the first bit.
    """
    coefficients = perceptual_coefficients(grid)
    mean = coefficients[1:].mean()
    return coefficients < mean


BIT_RULES: Dict[HashAlgorithm, Callable[[np.ndarray], np.ndarray]] = {
    HashAlgorithm.AVERAGE: average_hash_bits,
    HashAlgorithm.DIFFERENCE: difference_hash_bits,
    HashAlgorithm.PERCEPTUAL: perceptual_hash_bits,
}


class HasherImpl(Hasher):
    """
    Computes fingerprints through an injected Sampler.
    Has no state beyond the sampler, so results depend only on file content.
    """

    def __init__(self, sampler: Optional[Sampler] = None):
        self.sampler = sampler or PillowSampler()

    def compute(self, path: str, algorithm: HashAlgorithm) -> HashResult:
        """
        Fingerprint one file.

        Returns:
            HashResult with decoded=False and the sentinel fingerprint when
            the file could not be decoded.
        """
        width, height = algorithm.grid_size
        try:
            grid = self.sampler.sample(path, width, height)
        except DecodeError as e:
            logger.warning(f"Skipping {path}: {e}")
            return HashResult(fingerprint=SENTINEL_FINGERPRINT, decoded=False)

        bits = BIT_RULES[algorithm](grid)
        fingerprint = from_bits(bits)
        logger.debug(f"{algorithm.value} hash of {path}: {fingerprint}")
        return HashResult(fingerprint=fingerprint)
