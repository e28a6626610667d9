"""Benefit cost proration and per-employee cost.

Benefit premiums are fixed for the base year and compound forward by the
scenario's benefit growth rate. New hires only accrue benefits from their
benefit start day (see calendar.calculate_benefit_start_day).
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..calendar import calculate_benefit_start_day, days_in_year, start_portion_to_start_day
from ..config import resolve_rules
from ..schemas import EngineRules, NewEmployee, PhysicianBase
from ..taxes import calculate_employer_payroll_taxes, round_dollars

logger = logging.getLogger(__name__)

DEFAULT_BENEFIT_GROWTH_PCT = 5.0


def get_benefit_costs_for_year(
    year: int,
    benefit_growth_pct: float,
    rules: Optional[EngineRules] = None,
) -> float:
    """Full-year benefit cost for one employee.

    Years at or before the base year return the base cost; later years
    compound by (1 + growth/100) per year.
    """
    benefits = resolve_rules(rules).benefits
    base_cost = benefits.annual_cost
    if year <= benefits.base_year:
        return base_cost
    years_of_growth = year - benefits.base_year
    return base_cost * (1 + benefit_growth_pct / 100) ** years_of_growth


@dataclass(frozen=True)
class BenefitProration:
    """Benefits for one physician in one year, with how they were prorated."""

    amount: float
    benefit_start_day: Optional[int] = None
    starts_next_year: bool = False

    @property
    def note(self) -> str:
        if self.starts_next_year:
            return " (starts next year)"
        if self.benefit_start_day is not None:
            return f" (prorated from day {self.benefit_start_day})"
        return ""


def get_prorated_benefits(
    physician: PhysicianBase,
    year: int,
    benefit_growth_pct: float = DEFAULT_BENEFIT_GROWTH_PCT,
    rules: Optional[EngineRules] = None,
) -> BenefitProration:
    """Benefits accrued by a physician in a year.

    - receives_benefits false: nothing
    - newEmployee: yearly cost * (days_in_year - start + 1) / days_in_year,
      zero if the benefit start day falls next year
    - everyone else: the full yearly cost
    """
    if not physician.receives_benefits:
        return BenefitProration(amount=0.0)

    yearly_cost = get_benefit_costs_for_year(year, benefit_growth_pct, rules)

    if isinstance(physician, NewEmployee):
        start_day = start_portion_to_start_day(physician.start_portion_of_year or 0, year)
        benefit_start_day = calculate_benefit_start_day(start_day, year)
        total_days = days_in_year(year)

        if benefit_start_day > total_days:
            logger.debug(f"{physician.id}: benefits start after {year}")
            return BenefitProration(amount=0.0, starts_next_year=True)

        benefit_days = max(0, total_days - benefit_start_day + 1)
        return BenefitProration(
            amount=yearly_cost * benefit_days / total_days,
            benefit_start_day=benefit_start_day,
        )

    return BenefitProration(amount=yearly_cost)


@dataclass(frozen=True)
class EmployeeCostBreakdown:
    """Components of an employee's total cost to the practice."""

    salary: float
    bonus: float
    benefits: BenefitProration
    payroll_taxes: float
    receives_benefits: bool
    delayed_w2_amount: float = 0.0
    delayed_w2_taxes: float = 0.0
    delayed_w2_details: str = ""

    @property
    def total(self) -> float:
        return (self.salary + self.bonus + self.benefits.amount + self.payroll_taxes
                + self.delayed_w2_amount + self.delayed_w2_taxes)

    def describe(self) -> str:
        """Multi-line cost summary in whole dollars."""
        lines: List[str] = [f"Base Salary: {format_currency(self.salary)}"]
        if self.bonus > 0:
            lines.append(f"Bonus: {format_currency(self.bonus)}")
        if self.receives_benefits:
            lines.append(f"Benefits: {format_currency(self.benefits.amount)}{self.benefits.note}")
        lines.append(f"Employer Taxes: {format_currency(self.payroll_taxes)}")
        if self.delayed_w2_amount > 0:
            lines.append(f"Prior Year W2: {format_currency(self.delayed_w2_amount)}")
            lines.append(f"Prior Year Taxes: {format_currency(self.delayed_w2_taxes)}")
            if self.delayed_w2_details:
                lines.append(f"Periods: {self.delayed_w2_details}")
        lines.append("")
        lines.append(f"Total: {format_currency(self.total)}")
        return "\n".join(lines)


def format_currency(amount: float) -> str:
    """$1,234 style, whole dollars."""
    rounded = round_dollars(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,}"


def get_employee_cost_breakdown(
    physician: PhysicianBase,
    year: int = 2025,
    benefit_growth_pct: float = DEFAULT_BENEFIT_GROWTH_PCT,
    rules: Optional[EngineRules] = None,
    delayed_w2_amount: float = 0.0,
    delayed_w2_taxes: float = 0.0,
    delayed_w2_details: str = "",
) -> EmployeeCostBreakdown:
    """Cost components for a physician's salary as given (no proration)."""
    salary = physician.salary or 0
    return EmployeeCostBreakdown(
        salary=salary,
        bonus=physician.bonus_amount or 0,
        benefits=get_prorated_benefits(physician, year, benefit_growth_pct, rules),
        payroll_taxes=calculate_employer_payroll_taxes(salary, year, rules),
        receives_benefits=physician.receives_benefits,
        delayed_w2_amount=delayed_w2_amount,
        delayed_w2_taxes=delayed_w2_taxes,
        delayed_w2_details=delayed_w2_details,
    )


def calculate_employee_total_cost(
    physician: PhysicianBase,
    year: int = 2025,
    benefit_growth_pct: float = DEFAULT_BENEFIT_GROWTH_PCT,
    rules: Optional[EngineRules] = None,
) -> float:
    """salary + prorated benefits + employer payroll taxes on salary + bonus."""
    return get_employee_cost_breakdown(physician, year, benefit_growth_pct, rules).total
