"""Employer payroll tax calculations.

Computes the employer side of statutory payroll taxes on W2 wages for a
Washington State medical practice with fewer than 50 employees. Each
component is computed independently on the full annual wage amount and
the components are summed. The additional 0.9% Medicare surcharge is
employee-paid and deliberately absent.
"""

import math
from dataclasses import asdict, dataclass
from typing import Dict, Optional

from ..config import resolve_rules
from ..schemas import EngineRules


def round_dollars(amount: float) -> int:
    """Round to whole dollars, halves up.

    Used only where a human-readable total is produced; running sums keep
    fractional cents.
    """
    return math.floor(amount + 0.5)


def get_social_security_wage_base(year: int, rules: Optional[EngineRules] = None) -> float:
    """SS wage base for a year. Years past the table use the last tabulated base."""
    return resolve_rules(rules).payroll_taxes.social_security_wage_base(year)


@dataclass(frozen=True)
class EmployerTaxBreakdown:
    """Employer payroll tax components for one wage amount."""

    federal_unemployment: float
    social_security: float
    medicare: float
    state_unemployment: float
    state_family_leave: float
    state_disability: float
    state_minor: float

    @property
    def total(self) -> float:
        return (self.federal_unemployment + self.social_security + self.medicare
                + self.state_unemployment + self.state_family_leave
                + self.state_disability + self.state_minor)

    def to_dict(self) -> Dict[str, float]:
        result = asdict(self)
        result["total"] = self.total
        return result


def calculate_employer_payroll_tax_breakdown(
    wages: float,
    year: int = 2025,
    rules: Optional[EngineRules] = None,
) -> EmployerTaxBreakdown:
    """Compute each employer payroll tax component on annual wages.

    Args:
        wages: Annual W2 wages subject to tax
        year: Tax year (selects the SS wage base)
        rules: Engine rules (packaged defaults if omitted)

    Returns:
        EmployerTaxBreakdown with the seven components
    """
    tax = resolve_rules(rules).payroll_taxes
    ss_wage_base = tax.social_security_wage_base(year)

    return EmployerTaxBreakdown(
        federal_unemployment=min(wages, tax.federal_unemployment_wage_base) * tax.federal_unemployment_rate,
        social_security=min(wages, ss_wage_base) * tax.social_security_rate,
        medicare=wages * tax.medicare_rate,
        state_unemployment=min(wages, tax.state_unemployment_wage_base) * tax.state_unemployment_rate,
        state_family_leave=min(wages, ss_wage_base) * tax.state_family_leave_rate,
        state_disability=wages * tax.state_disability_rate,
        state_minor=wages * tax.state_minor_rate,
    )


def calculate_employer_payroll_taxes(
    wages: float,
    year: int = 2025,
    rules: Optional[EngineRules] = None,
) -> float:
    """Total employer payroll taxes on annual wages (unrounded)."""
    return calculate_employer_payroll_tax_breakdown(wages, year, rules).total
