import pytest

from ddtstat.core.value_objects.size_value import SizeValue, parse_size_token
from ddtstat.core.exceptions.dedup_exceptions import MalformedSizeToken


class TestSizeValue:
    """Test suite for histogram size token parsing."""

    @pytest.mark.parametrize("suffix,rank", [("", 0), ("K", 1), ("M", 2), ("G", 3), ("T", 4)])
    def test_suffix_scales_by_power_of_1024(self, suffix, rank):
        for n in (0, 1, 7, 512, 1000):
            assert parse_size_token(f"{n}{suffix}") == n * 1024 ** rank

    def test_ten_gib(self):
        assert parse_size_token("10G") == 10737418240

    def test_six_gib(self):
        assert parse_size_token("6G") == 6442450944

    def test_fractional_mantissa_is_exact(self):
        assert parse_size_token("2.50G") == 2684354560
        assert parse_size_token("4.50G") == 4831838208

    def test_fractional_bytes_are_truncated(self):
        # 2.43 * 1024 = 2488.32
        assert parse_size_token("2.43K") == 2488

    def test_two_decimal_digits_are_retained(self):
        assert parse_size_token("1.01T") - parse_size_token("1.00T") == 10995116277

    def test_surrounding_whitespace_ignored(self):
        assert parse_size_token("  128K ") == 131072

    @pytest.mark.parametrize("token", [
        "",
        "   ",
        "K",
        "abc",
        "12X",
        "1.5.2G",
        "-5G",
        "1,5G",
        "10P",
        "10GB",
        "-",
        ".5G",
    ])
    def test_malformed_tokens_rejected(self, token):
        with pytest.raises(MalformedSizeToken) as exc_info:
            parse_size_token(token)
        assert exc_info.value.error_code == "MALFORMED_SIZE_TOKEN"

    def test_none_rejected(self):
        with pytest.raises(MalformedSizeToken):
            SizeValue.from_zfs_string(None)

    def test_negative_size_rejected(self):
        with pytest.raises(ValueError):
            SizeValue(-1)
