"""Tests for employer payroll tax calculations.

Uses the packaged default rules (2025 Washington State rates).
"""

import pytest

from practicecomp.sdk.taxes import (
    calculate_employer_payroll_tax_breakdown,
    calculate_employer_payroll_taxes,
    get_social_security_wage_base,
    round_dollars,
)


# === TEST CONSTANTS ===

TEST_YEAR = 2025
TEST_SS_WAGE_BASE_2025 = 176100
# 6.2% of the 2025 wage base
TEST_SS_AT_CAP = 10918.20


class TestSocialSecurityWageBase:
    """Tests for year lookup in the wage base table."""

    def test_tabulated_years(self):
        assert get_social_security_wage_base(2025) == TEST_SS_WAGE_BASE_2025
        assert get_social_security_wage_base(2026) == 183600
        assert get_social_security_wage_base(2030) == 215400

    def test_year_after_table_uses_last_base(self):
        """Years past the table clamp to the most recent base."""
        assert get_social_security_wage_base(2035) == 215400

    def test_year_before_table_uses_first_base(self):
        assert get_social_security_wage_base(2020) == TEST_SS_WAGE_BASE_2025


class TestTaxBreakdown:
    """Tests for individual tax components."""

    def test_social_security_at_wage_base(self):
        breakdown = calculate_employer_payroll_tax_breakdown(TEST_SS_WAGE_BASE_2025, TEST_YEAR)
        assert breakdown.social_security == pytest.approx(TEST_SS_AT_CAP)

    def test_social_security_capped_above_wage_base(self):
        """Wages above the base do not increase the SS component."""
        breakdown = calculate_employer_payroll_tax_breakdown(300000, TEST_YEAR)
        assert breakdown.social_security == pytest.approx(TEST_SS_AT_CAP)

    def test_medicare_uncapped(self):
        breakdown = calculate_employer_payroll_tax_breakdown(300000, TEST_YEAR)
        assert breakdown.medicare == pytest.approx(4350.0)

    def test_unemployment_components_capped(self):
        breakdown = calculate_employer_payroll_tax_breakdown(100000, TEST_YEAR)
        assert breakdown.federal_unemployment == pytest.approx(42.0)
        assert breakdown.state_unemployment == pytest.approx(655.2)

    def test_family_leave_capped_at_ss_base(self):
        breakdown = calculate_employer_payroll_tax_breakdown(300000, TEST_YEAR)
        assert breakdown.state_family_leave == pytest.approx(TEST_SS_WAGE_BASE_2025 * 0.00658)

    def test_breakdown_to_dict_includes_total(self):
        breakdown = calculate_employer_payroll_tax_breakdown(100000, TEST_YEAR)
        data = breakdown.to_dict()
        assert set(data) == {
            "federal_unemployment", "social_security", "medicare",
            "state_unemployment", "state_family_leave", "state_disability",
            "state_minor", "total",
        }
        assert data["total"] == pytest.approx(breakdown.total)


class TestTotalPayrollTaxes:
    """Tests for the summed employer tax."""

    def test_total_on_100k(self):
        # 42 + 6200 + 1450 + 655.2 + 658 + 255 + 30
        assert calculate_employer_payroll_taxes(100000, TEST_YEAR) == pytest.approx(9290.2)

    def test_zero_wages(self):
        assert calculate_employer_payroll_taxes(0, TEST_YEAR) == 0

    def test_total_not_rounded(self):
        """Totals keep fractional cents."""
        total = calculate_employer_payroll_taxes(100000, TEST_YEAR)
        assert total != round_dollars(total)

    def test_later_year_uses_higher_wage_base(self):
        """2026 SS base is higher, so taxes on 200k increase."""
        assert calculate_employer_payroll_taxes(200000, 2026) > calculate_employer_payroll_taxes(200000, 2025)

    def test_monotonic_in_wages(self):
        amounts = [0, 5000, 50000, 176100, 250000]
        totals = [calculate_employer_payroll_taxes(w, TEST_YEAR) for w in amounts]
        assert totals == sorted(totals)


class TestRoundDollars:
    """Tests for whole-dollar rounding (halves up)."""

    @pytest.mark.parametrize("amount,expected", [
        (101666.58, 101667),
        (2.5, 3),
        (2.49, 2),
        (-2.5, -2),
        (0, 0),
    ])
    def test_round_dollars(self, amount, expected):
        assert round_dollars(amount) == expected
