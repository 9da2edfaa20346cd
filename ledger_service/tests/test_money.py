"""
Unit tests for money helpers: rounding, tolerance checks and share distribution.
"""
import pytest
from decimal import Decimal
from ledger_service.utils.money import (
    amounts_match,
    clamp_non_negative,
    distribute_by_percentage,
    distribute_equally,
    is_zero,
    round_decimal,
    to_decimal,
    validate_split_sum,
)


@pytest.mark.unit
class TestRounding:

    def test_round_to_cents(self):
        assert round_decimal(Decimal("43.333333")) == Decimal("43.33")
        assert round_decimal(Decimal("43.336666")) == Decimal("43.34")

    def test_to_decimal_avoids_float_artefacts(self):
        assert to_decimal(0.1) == Decimal("0.1")
        assert to_decimal("12.50") == Decimal("12.50")
        assert to_decimal(3) == Decimal("3")


@pytest.mark.unit
class TestTolerance:

    def test_is_zero(self):
        assert is_zero(Decimal("0"))
        assert is_zero(Decimal("0.004"))
        assert is_zero(Decimal("-0.009"))
        assert not is_zero(Decimal("0.01"))
        assert not is_zero(Decimal("-5"))

    def test_amounts_match_within_a_cent(self):
        assert amounts_match(Decimal("100"), Decimal("100.01"))
        assert amounts_match(Decimal("99.99"), Decimal("100"))
        assert not amounts_match(Decimal("99.98"), Decimal("100"))

    def test_clamp_non_negative(self):
        assert clamp_non_negative(Decimal("-12.5")) == Decimal("0")
        assert clamp_non_negative(Decimal("12.345")) == Decimal("12.34")
        assert clamp_non_negative(Decimal("0")) == Decimal("0")


@pytest.mark.unit
class TestValidateSplitSum:

    def test_valid_sum(self):
        validate_split_sum([Decimal("33.33"), Decimal("33.33"), Decimal("33.33")], Decimal("100"))

    def test_invalid_sum(self):
        with pytest.raises(ValueError, match="don't add up"):
            validate_split_sum([Decimal("50"), Decimal("49")], Decimal("100"))


@pytest.mark.unit
class TestDistribution:

    def test_equal_shares_sum_exactly(self):
        shares = distribute_equally(Decimal("100"), 3)
        assert shares == [Decimal("33.34"), Decimal("33.33"), Decimal("33.33")]
        assert sum(shares) == Decimal("100.00")

    def test_equal_shares_even_split(self):
        assert distribute_equally(Decimal("1000"), 2) == [Decimal("500.00"), Decimal("500.00")]

    def test_equal_shares_no_participants(self):
        assert distribute_equally(Decimal("10"), 0) == []

    def test_percentage_shares(self):
        shares = distribute_by_percentage(Decimal("300"), [Decimal("50"), Decimal("30"), Decimal("20")])
        assert shares == [Decimal("150.00"), Decimal("90.00"), Decimal("60.00")]

    def test_percentage_shares_absorb_rounding(self):
        shares = distribute_by_percentage(Decimal("10"), [Decimal("50"), Decimal("50")])
        assert sum(shares) == Decimal("10.00")
        odd = distribute_by_percentage(Decimal("100"), [Decimal("33.33"), Decimal("33.33"), Decimal("33.34")])
        assert sum(odd) == Decimal("100.00")
