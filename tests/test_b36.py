"""
Tests for base-36 encoding.
"""

import pytest
from wgutil.b36 import encode_base36, decode_base36, make_uid
from wgutil.errors import OutOfRangeError


class TestEncode:
    """Test encode_base36."""

    @pytest.mark.parametrize("value, expected", [
        (0, "0"),
        (9, "9"),
        (10, "A"),
        (35, "Z"),
        (36, "10"),
        (1295, "ZZ"),
        (1296, "100"),
    ])
    def test_encode(self, value, expected):
        assert encode_base36(value) == expected

    def test_min_length_pads(self):
        assert encode_base36(5, 3) == "005"

    def test_min_length_does_not_truncate(self):
        assert encode_base36(1296, 2) == "100"

    def test_negative(self):
        with pytest.raises(OutOfRangeError):
            encode_base36(-1)


class TestDecode:
    """Test decode_base36."""

    @pytest.mark.parametrize("value", [0, 1, 35, 36, 123456789])
    def test_inverse(self, value):
        assert decode_base36(encode_base36(value, 6)) == value

    def test_lower_case(self):
        assert decode_base36("zz") == 1295

    @pytest.mark.parametrize("text", ["", "A-B", "é"])
    def test_invalid(self, text):
        with pytest.raises(OutOfRangeError):
            decode_base36(text)


class TestMakeUid:
    """Test make_uid."""

    def test_format(self):
        uid = make_uid(3, now=1_700_000_000.5)
        stamp, counter = uid.split("-")
        assert len(stamp) == 11
        assert counter == "3"
        assert decode_base36(stamp[:7]) == 1_700_000_000
        assert decode_base36(stamp[7:]) == 500_000

    def test_later_sorts_after(self):
        assert make_uid(1, now=1_700_000_000.0) < make_uid(1, now=1_700_000_001.0)

    def test_counter_distinguishes(self):
        assert make_uid(1, now=5.0) != make_uid(2, now=5.0)

    def test_microseconds_carry_into_seconds(self):
        """A fraction that rounds up to a full second bumps the seconds."""
        uid = make_uid(1, now=1_700_000_000.9999999)
        stamp = uid.split("-")[0]
        assert decode_base36(stamp[:7]) == 1_700_000_001
        assert decode_base36(stamp[7:]) == 0
        assert uid > make_uid(1, now=1_700_000_000.9)
