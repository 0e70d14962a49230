"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/fingerprint.py
Conversions for 64-bit fingerprints.

A fingerprint is an `imagehash.ImageHash` over an 8x8 boolean matrix. Bits are
stored in the order the hashing algorithm emits them (row-major), so the first
emitted bit is the most significant bit of the integer form and of the hex form.
"""

import re
from typing import Sequence

import numpy as np
import imagehash

FINGERPRINT_BITS = 64
HEX_LENGTH = FINGERPRINT_BITS // 4
SENTINEL_VALUE = (1 << FINGERPRINT_BITS) - 1

_HEX_PATTERN = re.compile(r"^[0-9a-fA-F]{16}$")


def from_bits(bits: Sequence[bool]) -> imagehash.ImageHash:
    """Pack 64 booleans (first element = most significant bit) into a fingerprint."""
    array = np.asarray(bits, dtype=bool)
    if array.size != FINGERPRINT_BITS:
        raise ValueError(f"Expected {FINGERPRINT_BITS} bits, got {array.size}")
    return imagehash.ImageHash(array.reshape(8, 8))


def from_int(value: int) -> imagehash.ImageHash:
    """Build a fingerprint from an unsigned 64-bit integer."""
    if not 0 <= value <= SENTINEL_VALUE:
        raise ValueError(f"Fingerprint out of 64-bit range: {value}")
    shifts = np.arange(FINGERPRINT_BITS - 1, -1, -1, dtype=np.uint64)
    bits = (np.uint64(value) >> shifts) & np.uint64(1)
    return from_bits(bits.astype(bool))


def to_int(fingerprint: imagehash.ImageHash) -> int:
    return int(to_hex(fingerprint), 16)


def to_hex(fingerprint: imagehash.ImageHash) -> str:
    """16 lowercase hex digits, zero padded."""
    return str(fingerprint)


def from_hex(text: str) -> imagehash.ImageHash:
    """
    Parse the fixed-width hex form written to the cache.

    Raises:
        ValueError: if the text is not exactly 16 hex digits
    """
    if not isinstance(text, str) or not _HEX_PATTERN.match(text):
        raise ValueError(f"Invalid fingerprint text: {text!r}")
    return imagehash.hex_to_hash(text.lower())


def hamming_distance(a: imagehash.ImageHash, b: imagehash.ImageHash) -> int:
    """
    Number of differing bits between two fingerprints (0..64).
    """
    return int(a - b)


SENTINEL_FINGERPRINT = from_int(SENTINEL_VALUE)
