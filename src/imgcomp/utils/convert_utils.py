"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""
import re

from imgcomp.core.models import MIN_TOLERANCE, MAX_TOLERANCE

_TOLERANCE_PATTERN = re.compile(r"0|[1-9][0-9]*")


class ConvertUtils:
    @staticmethod
    def parse_tolerance(value: str) -> int:
        """
        Convert a tolerance argument to int.
        Accepts plain decimal digits only: no sign, no leading zeros,
        no whitespace and no trailing characters. Range is 0..64.
        Raises ValueError for anything else.
        """
        if not isinstance(value, str) or not _TOLERANCE_PATTERN.fullmatch(value):
            raise ValueError(f"Invalid tolerance: '{value}'")

        tolerance = int(value)
        if not MIN_TOLERANCE <= tolerance <= MAX_TOLERANCE:
            raise ValueError(
                f"Tolerance out of range: '{value}'. "
                f"Expected an integer from {MIN_TOLERANCE} to {MAX_TOLERANCE}"
            )
        return tolerance

    @staticmethod
    def is_valid_tolerance(value: str) -> bool:
        """
        Check if the input string is an acceptable tolerance.
        """
        try:
            ConvertUtils.parse_tolerance(value)
            return True
        except ValueError:
            return False
