"""Roster-level cost aggregation.

SDK layer - pure logic over a physician roster. Totals keep fractional
cents internally and round to whole dollars on return.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Dict, Optional, Sequence

from .config import resolve_rules
from .employee.benefits import (
    DEFAULT_BENEFIT_GROWTH_PCT,
    get_benefit_costs_for_year,
    get_prorated_benefits,
)
from .employee.portions import get_employee_portion_of_year
from .schemas import (
    EMPLOYEE_TYPES,
    EngineRules,
    EmployeeToPartner,
    PartnerToRetire,
    PhysicianBase,
    PhysicianType,
)
from .taxes import calculate_employer_payroll_taxes, round_dollars
from .w2 import calculate_delayed_w2_payment

logger = logging.getLogger(__name__)


def calculate_guaranteed_payments(physicians: Sequence[PhysicianBase]) -> int:
    """Buyout (guaranteed payment) total owed to retiring partners."""
    total = sum(
        p.buyout_cost or 0
        for p in physicians
        if isinstance(p, PartnerToRetire)
    )
    return round_dollars(total)


def calculate_locums_salary(locum_costs: float) -> int:
    """Locum physician costs in whole dollars."""
    return round_dollars(locum_costs)


@dataclass(frozen=True)
class MDAssociatesCosts:
    """Employee-physician payroll totals, whole dollars."""

    total_salary: int
    total_benefits: int
    total_payroll_taxes: int

    @property
    def total(self) -> int:
        return self.total_salary + self.total_benefits + self.total_payroll_taxes

    def to_dict(self) -> Dict[str, int]:
        result = asdict(self)
        result["total"] = self.total
        return result


def prorated_salary(physician: PhysicianBase) -> float:
    """Salary for the employee portion of the year only."""
    salary = physician.salary or 0
    if physician.kind == PhysicianType.EMPLOYEE:
        return salary
    return salary * get_employee_portion_of_year(physician)


def calculate_md_associates_costs(
    physicians: Sequence[PhysicianBase],
    year: int = 2025,
    benefit_growth_pct: float = DEFAULT_BENEFIT_GROWTH_PCT,
    rules: Optional[EngineRules] = None,
) -> MDAssociatesCosts:
    """Aggregate W2 payroll for employee-type physicians.

    For each physician with employee time: prorated salary, prorated
    benefits, and employer taxes on the prorated salary. Employee-to-partner
    physicians also carry their delayed W2 wages and taxes.
    """
    total_salary = 0.0
    total_benefits = 0.0
    total_payroll_taxes = 0.0

    for physician in physicians:
        if physician.kind not in EMPLOYEE_TYPES:
            continue
        employee_portion = get_employee_portion_of_year(physician)
        if employee_portion <= 0:
            continue

        salary = prorated_salary(physician)

        benefits = get_prorated_benefits(physician, year, benefit_growth_pct, rules).amount
        if isinstance(physician, EmployeeToPartner):
            benefits *= employee_portion

        payroll_taxes = calculate_employer_payroll_taxes(salary, year, rules)

        if isinstance(physician, EmployeeToPartner):
            delayed = calculate_delayed_w2_payment(physician, year, rules)
            total_salary += delayed.amount
            total_payroll_taxes += delayed.taxes

        total_salary += salary
        total_benefits += benefits
        total_payroll_taxes += payroll_taxes

    logger.debug(
        f"MD associates {year}: salary {total_salary:.2f}, "
        f"benefits {total_benefits:.2f}, taxes {total_payroll_taxes:.2f}"
    )

    return MDAssociatesCosts(
        total_salary=round_dollars(total_salary),
        total_benefits=round_dollars(total_benefits),
        total_payroll_taxes=round_dollars(total_payroll_taxes),
    )


def compute_default_non_md_employment_costs(
    year: int = 2025,
    rules: Optional[EngineRules] = None,
) -> int:
    """Staff (non-physician) employment cost: wages + employer taxes + benefits.

    Benefits use the base-year premium for full-time staff.
    """
    rules = resolve_rules(rules)
    base_benefits = get_benefit_costs_for_year(rules.benefits.base_year, 0, rules)

    total = 0.0
    for member in rules.staff:
        wages = member.annual_wages
        total += wages + calculate_employer_payroll_taxes(wages, year, rules)
        if member.receives_benefits:
            total += base_benefits
    return round_dollars(total)
