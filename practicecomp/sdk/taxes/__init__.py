"""taxes - Employer payroll tax logic.

Scope:
- Employer-side statutory taxes on W2 wages (federal + state)
- Year-indexed Social Security wage base lookup

Constraints:
- Pure calculation - no roster or scenario knowledge
- Rates and wage bases come from EngineRules (payroll_taxes section)

Usage:
    from practicecomp.sdk.taxes import calculate_employer_payroll_taxes

    taxes = calculate_employer_payroll_taxes(300000, 2026)
"""

from .payroll import (
    EmployerTaxBreakdown,
    calculate_employer_payroll_tax_breakdown,
    calculate_employer_payroll_taxes,
    get_social_security_wage_base,
    round_dollars,
)
from ..schemas import PayrollTaxRules

__all__ = [
    "EmployerTaxBreakdown",
    "calculate_employer_payroll_tax_breakdown",
    "calculate_employer_payroll_taxes",
    "get_social_security_wage_base",
    "round_dollars",
    "PayrollTaxRules",
]
