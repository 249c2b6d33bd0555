"""Unit tests for decimal normalization."""

import pytest

from feedguard.src.errors import PriceOverflowError
from feedguard.src.normalizer import MAX_UINT256, PRICE_DECIMALS, normalize_price


class TestNormalizePrice:
    """Test rescaling to canonical precision."""

    def test_canonical_decimals_unchanged(self) -> None:
        """A value already at 8 decimals should be returned as is."""
        assert PRICE_DECIMALS == 8
        assert normalize_price(123_456_789, 8) == 123_456_789

    def test_scale_down_18_decimals(self) -> None:
        """18-decimal sources should be divided by 10^10."""
        assert normalize_price(50_000 * 10**18, 18) == 50_000 * 10**8

    def test_scale_up_6_decimals(self) -> None:
        """6-decimal sources should be multiplied by 10^2."""
        assert normalize_price(1 * 10**6, 6) == 1 * 10**8

    def test_scale_up_zero_decimals(self) -> None:
        """0-decimal sources should be multiplied by 10^8."""
        assert normalize_price(42, 0) == 42 * 10**8

    def test_scale_down_truncates(self) -> None:
        """Digits below canonical precision should be dropped, not rounded."""
        assert normalize_price(199_999_999_999, 10) == 1_999_999_999
        assert normalize_price(10**10 - 1, 18) == 0

    @pytest.mark.parametrize("decimals", [9, 12, 18, 24])
    def test_scale_down_matches_integer_division(self, decimals: int) -> None:
        """normalize(v, d) should equal v // 10^(d-8) for d > 8."""
        value = 987_654_321_987_654_321_987
        assert normalize_price(value, decimals) == value // 10 ** (decimals - 8)

    @pytest.mark.parametrize("decimals", [0, 2, 6, 7])
    def test_scale_up_matches_multiplication(self, decimals: int) -> None:
        """normalize(v, d) should equal v * 10^(8-d) for d < 8."""
        value = 31_337
        assert normalize_price(value, decimals) == value * 10 ** (8 - decimals)

    def test_custom_target_decimals(self) -> None:
        """target_decimals should override the canonical precision."""
        assert normalize_price(1_500_000, 6, target_decimals=18) == 15 * 10**17

    def test_max_value_fits(self) -> None:
        """MAX_UINT256 at canonical decimals should not overflow."""
        assert normalize_price(MAX_UINT256, 8) == MAX_UINT256

    def test_overflow_raises(self) -> None:
        """Results above MAX_UINT256 should raise PriceOverflowError."""
        with pytest.raises(PriceOverflowError) as exc_info:
            normalize_price(MAX_UINT256 // 10 + 1, 7)
        assert exc_info.value.source_decimals == 7
        assert isinstance(exc_info.value, ArithmeticError)

    def test_negative_value_rejected(self) -> None:
        """Negative raw values should raise ValueError."""
        with pytest.raises(ValueError, match="raw_value must be non-negative"):
            normalize_price(-1, 8)

    def test_negative_decimals_rejected(self) -> None:
        """Negative decimals should raise ValueError."""
        with pytest.raises(ValueError, match="decimals must be non-negative"):
            normalize_price(1, -1)
