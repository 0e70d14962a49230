"""
Tests for ConvertUtils tolerance parsing.
"""
import pytest

from imgcomp.utils.convert_utils import ConvertUtils


class TestParseTolerance:

    @pytest.mark.parametrize("value,expected", [("0", 0), ("1", 1), ("5", 5), ("63", 63), ("64", 64)])
    def test_valid(self, value, expected):
        assert ConvertUtils.parse_tolerance(value) == expected

    @pytest.mark.parametrize("value", ["05", "00", "+5", "-1", "5x", "x5", " 5", "5 ", "5.0", "", "0x10", "5\n", "5\r\n"])
    def test_malformed(self, value):
        with pytest.raises(ValueError, match="Invalid tolerance"):
            ConvertUtils.parse_tolerance(value)

    @pytest.mark.parametrize("value", ["65", "100", "99999999999999999999"])
    def test_out_of_range(self, value):
        with pytest.raises(ValueError, match="out of range"):
            ConvertUtils.parse_tolerance(value)

    def test_non_string(self):
        with pytest.raises(ValueError):
            ConvertUtils.parse_tolerance(5)


class TestIsValidTolerance:

    def test_valid(self):
        assert ConvertUtils.is_valid_tolerance("5")

    @pytest.mark.parametrize("value", ["05", "65", "five"])
    def test_invalid(self, value):
        assert not ConvertUtils.is_valid_tolerance(value)
