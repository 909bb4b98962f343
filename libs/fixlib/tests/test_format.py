from __future__ import annotations

import dataclasses
from fractions import Fraction

import pytest

from fixlib.core import FormatDescriptor, InvalidFormatError


class TestKeyForm:
    def test_signed_key(self):
        assert FormatDescriptor(True, 1, 4).key == "sfix<1,4>"

    def test_unsigned_key(self):
        assert FormatDescriptor(False, 2, 4).key == "ufix<2,4>"

    def test_str_is_key(self):
        d = FormatDescriptor(True, 3, 0)
        assert str(d) == d.key

    @pytest.mark.parametrize(
        "key,expected",
        [
            ("sfix<1,4>", FormatDescriptor(True, 1, 4)),
            ("ufix<2,4>", FormatDescriptor(False, 2, 4)),
            ("ufix<0,0>", FormatDescriptor(False, 0, 0)),
            (" sfix < 3 , 12 > ", FormatDescriptor(True, 3, 12)),
        ],
    )
    def test_parse(self, key, expected):
        assert FormatDescriptor.parse(key) == expected

    def test_parse_round_trip(self):
        d = FormatDescriptor(True, 7, 8)
        assert FormatDescriptor.parse(d.key) == d

    @pytest.mark.parametrize("key", ["fix<1,2>", "sfix<1>", "sfix<-1,2>", "sfix<1,2", "", "q15"])
    def test_parse_malformed(self, key):
        with pytest.raises(InvalidFormatError):
            FormatDescriptor.parse(key)


class TestValidation:
    @pytest.mark.parametrize(
        "signed,integer_bits,fractional_bits",
        [
            (True, -1, 0),
            (False, 0, -3),
            (True, 1.5, 0),
            (True, 1, "4"),
            ("yes", 1, 1),
            (1, 1, 1),
            (True, True, 1),
        ],
    )
    def test_rejects_malformed_parts(self, signed, integer_bits, fractional_bits):
        with pytest.raises(InvalidFormatError):
            FormatDescriptor(signed, integer_bits, fractional_bits)

    def test_invalid_format_is_value_error(self):
        with pytest.raises(ValueError):
            FormatDescriptor(True, -1, 0)

    def test_frozen(self):
        d = FormatDescriptor(True, 1, 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            d.integer_bits = 5

    def test_hashable_and_equal_by_value(self):
        assert FormatDescriptor(True, 1, 1) == FormatDescriptor(True, 1, 1)
        assert len({FormatDescriptor(True, 1, 1), FormatDescriptor(True, 1, 1)}) == 1
        assert FormatDescriptor(True, 1, 1) != FormatDescriptor(False, 1, 1)


class TestDerivedProperties:
    @pytest.mark.parametrize(
        "descriptor,width",
        [
            (FormatDescriptor(True, 1, 4), 6),
            (FormatDescriptor(False, 2, 4), 6),
            (FormatDescriptor(False, 0, 0), 0),
            (FormatDescriptor(True, 0, 15), 16),
        ],
    )
    def test_width(self, descriptor, width):
        assert descriptor.width == width

    def test_resolution(self):
        assert FormatDescriptor(False, 2, 4).resolution == Fraction(1, 16)
        assert FormatDescriptor(False, 2, 0).resolution == 1

    def test_signed_range(self):
        d = FormatDescriptor(True, 1, 1)
        assert d.raw_max == 4
        assert d.raw_min == -4
        assert d.max_value == 2.0
        assert d.min_value == -2.0

    def test_unsigned_range(self):
        d = FormatDescriptor(False, 2, 4)
        assert d.raw_max == 64
        assert d.raw_min == 0
        assert d.max_value == 4.0
        assert d.min_value == 0.0

    def test_contains_raw_is_inclusive(self):
        d = FormatDescriptor(True, 1, 1)
        assert d.contains_raw(4)
        assert d.contains_raw(-4)
        assert not d.contains_raw(5)
        assert not d.contains_raw(-5)
        assert not FormatDescriptor(False, 1, 1).contains_raw(-1)

    def test_with_fractional_bits(self):
        d = FormatDescriptor(True, 2, 3)
        assert d.with_fractional_bits(8) == FormatDescriptor(True, 2, 8)
