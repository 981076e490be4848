"""Tests for src.core.codec — encode_number / decode_number."""
import math

import pytest

from src.core.codec import encode_number, decode_number, is_number
from src.core.errors import DecodeFault


class TestIsNumber:
    def test_int_and_float(self):
        assert is_number(3)
        assert is_number(2.5)

    def test_bool_is_not_a_number(self):
        assert not is_number(True)

    def test_string(self):
        assert not is_number("5")


class TestEncode:
    def test_int(self):
        assert encode_number(42) == "42"

    def test_float(self):
        assert encode_number(2.5) == "2.5"

    def test_negative(self):
        assert encode_number(-7) == "-7"

    def test_non_finite(self):
        assert encode_number(math.inf) == "Infinity"
        assert encode_number(-math.inf) == "-Infinity"
        assert encode_number(math.nan) == "NaN"

    def test_rejects_bool(self):
        with pytest.raises(TypeError):
            encode_number(True)

    def test_rejects_string(self):
        with pytest.raises(TypeError):
            encode_number("5")


class TestDecode:
    def test_absent(self):
        assert decode_number(None) == 0

    def test_null(self):
        assert decode_number("null") == 0

    def test_int(self):
        value = decode_number("42")
        assert value == 42
        assert isinstance(value, int)

    def test_float(self):
        assert decode_number("2.5") == pytest.approx(2.5)

    def test_infinity(self):
        assert decode_number("Infinity") == math.inf

    def test_nan(self):
        assert math.isnan(decode_number("NaN"))

    def test_garbage(self):
        with pytest.raises(DecodeFault):
            decode_number("abc")

    def test_empty(self):
        with pytest.raises(DecodeFault):
            decode_number("")

    @pytest.mark.parametrize("raw", ["true", '"5"', "[1, 2]", '{"a": 1}'])
    def test_non_numeric_json(self, raw):
        with pytest.raises(DecodeFault):
            decode_number(raw)
