"""Delayed (cross-year) W2 for employee-to-partner transitions.

When a physician becomes a partner, pay periods whose work fell in the
prior calendar year but whose pay date is on or after the transition date
are still W2 wages in the current year. This module finds those periods,
counts the prior-year business days in each, and prices them at the
physician's hourly rate.

Known payroll corrections are listed under delayed_w2_overrides in the
engine rules and replace the computed result for that physician and year.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from .calendar import (
    PayPeriod,
    count_business_days,
    day_to_date,
    employee_portion_to_transition_day,
    format_short_date,
    get_pay_periods_for_year,
    prior_year_slice,
)
from .config import resolve_rules
from .employee.portions import DEFAULT_TRANSITION_PORTION
from .schemas import EmployeeToPartner, EngineRules, PhysicianBase
from .taxes import calculate_employer_payroll_taxes, round_dollars

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QualifyingPeriod:
    """Prior-year slice of a pay period paid after the transition."""

    work_start: date
    work_end: date
    pay_date: date
    business_days: int

    def describe(self) -> str:
        return (f"{format_short_date(self.work_start)}-{format_short_date(self.work_end)} "
                f"(paid {format_short_date(self.pay_date)}, {self.business_days} work days)")


@dataclass(frozen=True)
class DelayedW2Payment:
    """Cross-year W2 wages and employer taxes, in whole dollars."""

    amount: float = 0
    taxes: float = 0
    period_details: str = ""
    periods: List[QualifyingPeriod] = field(default_factory=list)
    overridden: bool = False

    @property
    def total_work_days(self) -> int:
        return sum(p.business_days for p in self.periods)


def find_qualifying_periods(
    periods: List[PayPeriod],
    transition_date: date,
    year: int,
) -> List[QualifyingPeriod]:
    """Periods paid on/after transition_date with work dates in the prior year."""
    qualifying = []
    for period in periods:
        if period.pay_date < transition_date:
            continue
        prior = prior_year_slice(period, year)
        if prior is None:
            continue
        work_start, work_end = prior
        qualifying.append(QualifyingPeriod(
            work_start=work_start,
            work_end=work_end,
            pay_date=period.pay_date,
            business_days=count_business_days(work_start, work_end),
        ))
    return qualifying


def calculate_delayed_w2_payment(
    physician: PhysicianBase,
    year: int,
    rules: Optional[EngineRules] = None,
) -> DelayedW2Payment:
    """Cross-year W2 owed to an employee-to-partner physician.

    Args:
        physician: Any physician; only employeeToPartner can owe delayed W2
        year: Calendar year the wages are paid in
        rules: Engine rules (packaged defaults if omitted)

    Returns:
        DelayedW2Payment. amount = work days * hours/day * salary / annual
        hours, taxes = employer taxes on that amount; both rounded to whole
        dollars.
    """
    if not isinstance(physician, EmployeeToPartner):
        return DelayedW2Payment()

    rules = resolve_rules(rules)

    override = rules.find_delayed_w2_override(physician.id, year)
    if override is not None:
        logger.debug(f"{physician.id}: using delayed W2 override for {year}")
        return DelayedW2Payment(
            amount=override.amount,
            taxes=override.taxes,
            period_details=override.details,
            overridden=True,
        )

    portion = physician.employee_portion_of_year
    if portion is None:
        portion = DEFAULT_TRANSITION_PORTION
    transition_date = day_to_date(employee_portion_to_transition_day(portion, year), year)

    calendar = rules.payroll_calendar
    hourly_rate = (physician.salary or 0) / calendar.annual_work_hours

    qualifying = find_qualifying_periods(get_pay_periods_for_year(year, calendar), transition_date, year)
    total_work_days = sum(p.business_days for p in qualifying)

    amount = total_work_days * calendar.hours_per_day * hourly_rate
    taxes = calculate_employer_payroll_taxes(amount, year, rules)

    logger.debug(
        f"{physician.id}: transition {transition_date.isoformat()}, "
        f"{len(qualifying)} cross-year periods, {total_work_days} work days, amount {amount:.2f}"
    )

    return DelayedW2Payment(
        amount=round_dollars(amount),
        taxes=round_dollars(taxes),
        period_details=", ".join(p.describe() for p in qualifying),
        periods=qualifying,
    )
