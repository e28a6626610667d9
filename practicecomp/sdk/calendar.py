"""Calendar helpers for portion-of-year math and the payroll schedule.

Day numbers are 1-based day-of-year values. Portions are fractions of the
calendar year in [0, 1]. Rounding of half days goes up, matching how the
scenario editor converts sliders to dates.
"""

import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional, Tuple

from .schemas import PayrollCalendarRules


MONTH_ABBREVIATIONS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
                       "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def days_in_months(year: int) -> List[int]:
    return [31, 29 if is_leap_year(year) else 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]


def day_of_year_to_date(day_of_year: int, year: int) -> Tuple[int, int]:
    """Convert a day-of-year to (month, day).

    Days past the end of the year land in December rather than raising.
    """
    remaining = day_of_year
    month = 0
    months = days_in_months(year)
    while month < 11 and remaining > months[month]:
        remaining -= months[month]
        month += 1
    return month + 1, remaining


def date_to_day_of_year(month: int, day: int, year: int) -> int:
    return sum(days_in_months(year)[:month - 1]) + day


def calendar_date_to_portion(month: int, day: int, year: int) -> float:
    """Portion of the year elapsed before the given date (Jan 1 -> 0)."""
    return (date_to_day_of_year(month, day, year) - 1) / days_in_year(year)


def format_month_day(month: int, day: int) -> str:
    return f"{MONTH_ABBREVIATIONS[month - 1]} {day}"


def employee_portion_to_transition_day(employee_portion_of_year: float, year: int) -> int:
    """First day as partner. Portion 0 -> day 1, portion 1 -> day after year end."""
    return max(1, round_half_up(employee_portion_of_year * days_in_year(year)) + 1)


def transition_day_to_employee_portion(transition_day: int, year: int) -> float:
    return max(0.0, (transition_day - 1) / days_in_year(year))


def start_portion_to_start_day(start_portion_of_year: float, year: int) -> int:
    """First day of work for a new hire. Portion 0 -> Jan 1."""
    return max(1, round_half_up(start_portion_of_year * days_in_year(year)) + 1)


def start_day_to_start_portion(start_day: int, year: int) -> float:
    return clamp((start_day - 1) / days_in_year(year), 0.0, 1.0)


def partner_portion_to_retirement_day(partner_portion_of_year: float, year: int) -> int:
    """Last working day as partner. Day 0 means retired in the prior year."""
    if partner_portion_of_year == 0:
        return 0
    return round_half_up(partner_portion_of_year * days_in_year(year))


def retirement_day_to_partner_portion(retirement_day: int, year: int) -> float:
    if retirement_day == 0:
        return 0.0
    return retirement_day / days_in_year(year)


def _first_of_month_day(month: int, year: int) -> int:
    return sum(days_in_months(year)[:month - 1]) + 1


def calculate_benefit_start_day(start_day: int, year: int) -> int:
    """Day-of-year benefits begin for a hire starting on start_day.

    Rules:
    - Hired on the 1st of a month (other than February): benefits begin the
      1st of the following month.
    - Otherwise: benefits begin the 1st of the month after the 30-day mark.

    Returns days_in_year(year) + 1 when benefits begin next year.
    """
    total_days = days_in_year(year)
    start_month, start_day_of_month = day_of_year_to_date(start_day, year)

    if start_day_of_month == 1 and start_month != 2:
        if start_month == 12:
            return total_days + 1
        return _first_of_month_day(start_month + 1, year)

    thirty_day_mark = start_day + 30
    if thirty_day_mark > total_days:
        return total_days + 1

    mark_month, _ = day_of_year_to_date(thirty_day_mark, year)
    if mark_month == 12:
        return total_days + 1
    return _first_of_month_day(mark_month + 1, year)


def day_to_date(day_of_year: int, year: int) -> date:
    """Calendar date for a day-of-year (may roll into the next year)."""
    return date(year, 1, 1) + timedelta(days=day_of_year - 1)


@dataclass(frozen=True)
class PayPeriod:
    """One bi-weekly pay period."""

    period_start: date
    period_end: date
    pay_date: date


def get_pay_periods_for_year(year: int, calendar: PayrollCalendarRules) -> List[PayPeriod]:
    """Pay periods relevant to a year.

    Starts at the period ending on or before Jan 14 of the year (so the
    period straddling New Year is included) and runs through the last pay
    date on or before Jan 31 of the following year. For years after the
    reference period the schedule is first advanced to the last pay date
    before Dec 31 of the prior year.
    """
    step = timedelta(days=calendar.period_days)
    period_end = calendar.reference_period_end
    pay_date = calendar.reference_pay_date

    prior_year_end = date(year - 1, 12, 31)
    while pay_date + step < prior_year_end:
        period_end += step
        pay_date += step

    first_end_cutoff = date(year, 1, 14)
    while period_end > first_end_cutoff:
        period_end -= step
        pay_date -= step

    last_pay_cutoff = date(year + 1, 1, 31)
    periods = []
    while pay_date <= last_pay_cutoff:
        periods.append(PayPeriod(
            period_start=period_end - timedelta(days=calendar.period_days - 1),
            period_end=period_end,
            pay_date=pay_date,
        ))
        period_end += step
        pay_date += step

    return periods


def count_business_days(start: date, end: date) -> int:
    """Count Monday-Friday days in [start, end] inclusive."""
    if end < start:
        return 0
    count = 0
    current = start
    while current <= end:
        if current.weekday() < 5:
            count += 1
        current += timedelta(days=1)
    return count


def format_short_date(d: date) -> str:
    """M/D, as shown on payroll reports."""
    return f"{d.month}/{d.day}"


def prior_year_slice(period: PayPeriod, year: int) -> Optional[Tuple[date, date]]:
    """Portion of a period's work dates that falls before Jan 1 of year."""
    prior_year_end = date(year - 1, 12, 31)
    if period.period_start > prior_year_end:
        return None
    return period.period_start, min(period.period_end, prior_year_end)
