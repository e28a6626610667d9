"""employee - Per-physician proration and cost.

Scope:
- Employee/partner portion of year by employment state (portions.py)
- Partner FTE weighting net of vacation (portions.py)
- Benefit cost growth and new-hire proration (benefits.py)
- Total employee cost to the practice (benefits.py)

Constraints:
- Pure functions of (physician, year, growth, rules); no roster state
- Physicians are frozen pydantic models and are never modified

Usage:
    from practicecomp.sdk.employee import get_employee_portion_of_year

    portion = get_employee_portion_of_year(physician)
    cost = calculate_employee_total_cost(physician, 2026, benefit_growth_pct=7.2)
"""

from .portions import (
    get_employee_portion_of_year,
    get_partner_portion_of_year,
    get_partner_fte_weight,
    get_partner_fte_weight_proper,
    get_relative_fte_weights,
)
from .benefits import (
    BenefitProration,
    EmployeeCostBreakdown,
    calculate_employee_total_cost,
    format_currency,
    get_benefit_costs_for_year,
    get_employee_cost_breakdown,
    get_prorated_benefits,
)

__all__ = [
    # Portions
    "get_employee_portion_of_year",
    "get_partner_portion_of_year",
    "get_partner_fte_weight",
    "get_partner_fte_weight_proper",
    "get_relative_fte_weights",
    # Benefits
    "BenefitProration",
    "EmployeeCostBreakdown",
    "calculate_employee_total_cost",
    "format_currency",
    "get_benefit_costs_for_year",
    "get_employee_cost_breakdown",
    "get_prorated_benefits",
]
