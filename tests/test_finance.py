"""Tests for installment math and percentage parsing."""

import pytest

from monthly_ledger.errors import ValidationError
from monthly_ledger.finance import (
    cuota,
    format_percent,
    installment_breakdown,
    parse_percent,
    round_currency,
)


class TestCuota:
    """Tests for the installment formula."""

    def test_zero_rate_is_simple_division(self):
        """Test that without interest the installment is principal / term."""
        assert cuota(1_200_000, 0, 12) == 100_000
        assert cuota(1_000_000, 0, 3) == round_currency(1_000_000 / 3)

    def test_non_positive_term_yields_zero(self):
        """Test that a term of zero or less gives no installment."""
        assert cuota(1_000_000, 0.02, 0) == 0
        assert cuota(1_000_000, 0.02, -3) == 0

    def test_annuity_with_interest(self):
        """Test the annuity formula for a 1.85% monthly rate."""
        assert 93_680 <= cuota(1_000_000, 0.0185, 12) <= 93_700

    def test_interest_raises_installment(self):
        """Test that interest always costs more than simple division."""
        assert cuota(1_000_000, 0.0185, 12) > cuota(1_000_000, 0, 12)

    def test_insurance_and_tax_added(self):
        """Test base + insurance + insurance tax."""
        # 100000 base + 12000 insurance + 2280 tax
        assert cuota(1_200_000, 0, 12, 0.12, 0.19) == 114_280

    def test_insurance_is_additive(self):
        """Test that the surcharge adds to the interest-bearing base within a unit."""
        base = cuota(1_000_000, 0.0185, 12)
        with_insurance = cuota(1_000_000, 0.0185, 12, 0.12, 0.19)
        expected_extra = 1_000_000 * 0.12 / 12 * 1.19
        assert abs(with_insurance - (base + expected_extra)) <= 1

    def test_rounds_half_up(self):
        """Test that halves round up, not to even."""
        assert round_currency(2.5) == 3
        assert round_currency(3.5) == 4
        assert round_currency(2.49) == 2
        assert cuota(5, 0, 2) == 3


class TestInstallmentBreakdown:
    """Tests for the display breakdown."""

    def test_parts_add_up(self):
        """Test that the parts match the rounded total."""
        breakdown = installment_breakdown(1_200_000, 0, 12, 0.12, 0.19)
        assert breakdown.base == pytest.approx(100_000)
        assert breakdown.insurance == pytest.approx(12_000)
        assert breakdown.insurance_tax == pytest.approx(2_280)
        assert breakdown.total == 114_280

    def test_total_matches_cuota(self):
        """Test that the total is the same value cuota() returns."""
        breakdown = installment_breakdown(3_500_000, 0.021, 24, 0.05, 0.19)
        assert breakdown.total == cuota(3_500_000, 0.021, 24, 0.05, 0.19)


class TestPercent:
    """Tests for comma-decimal percentage text."""

    def test_parse_comma_decimal(self):
        """Test that "1,85" becomes 0.0185."""
        assert parse_percent("1,85") == pytest.approx(0.0185)

    def test_parse_dot_decimal(self):
        """Test that a dot is accepted as the decimal separator."""
        assert parse_percent("1.85") == pytest.approx(0.0185)

    def test_parse_whole_number(self):
        """Test integers and surrounding whitespace."""
        assert parse_percent(" 12 ") == pytest.approx(0.12)
        assert parse_percent("0") == 0

    @pytest.mark.parametrize("text", ["abc", "1,2345", "", "-1", "1,", None])
    def test_parse_rejects_malformed(self, text):
        """Test that malformed text raises instead of defaulting to zero."""
        with pytest.raises(ValidationError):
            parse_percent(text)

    def test_error_names_field(self):
        """Test that the error names the field."""
        with pytest.raises(ValidationError, match="rate"):
            parse_percent("x", "rate")

    def test_format_percent(self):
        """Test rendering a fraction with a comma."""
        assert format_percent(0.0185) == "1,85"
        assert format_percent(0.12, decimals=0) == "12"
