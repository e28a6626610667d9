"""Partner compensation distribution for one projected year.

Methodology:
1. Employee costs (prorated wages + benefits + employer taxes)
2. Buyouts owed to retiring partners
3. Delayed W2 wages + taxes for employee-to-partner transitions
4. Medical director allocations: shared stipend by percentage to active
   partners, PRCS stipend to the PRCS director, fixed trailing amounts to
   prior-year retirees
5. Additional days worked, paid directly to the partner
6. Total income from every stream
7. Pool = income - costs - direct allocations (never negative)
8. Pool split by proper FTE weight
9. Partners: FTE share + direct allocations (+ W2 salary unless excluded)
10. Employees: prorated W2 salary
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import resolve_rules
from .costs import prorated_salary
from .employee.benefits import DEFAULT_BENEFIT_GROWTH_PCT, calculate_employee_total_cost
from .employee.portions import get_employee_portion_of_year, get_partner_fte_weight_proper
from .income import get_income_add_ons, resolve_prcs_director_id
from .schemas import (
    EMPLOYEE_TYPES,
    PARTNER_TYPES,
    EngineRules,
    EmployeeToPartner,
    FutureYear,
    PartnerToRetire,
    PhysicianBase,
    PhysicianType,
    ProjectionSettings,
)
from .w2 import calculate_delayed_w2_payment

logger = logging.getLogger(__name__)


@dataclass
class CompensationBreakdown:
    fte_share: float = 0.0
    md_allocation: float = 0.0
    additional_days_allocation: float = 0.0
    buyout: float = 0.0
    delayed_w2: float = 0.0
    trailing_md: float = 0.0
    w2_salary: float = 0.0


@dataclass
class CompensationResult:
    id: str
    name: str
    type: str
    comp: float
    breakdown: CompensationBreakdown = field(default_factory=CompensationBreakdown)


@dataclass
class PoolSummary:
    """Income, costs and the distributable pool for a year."""

    total_income: float
    total_costs: float
    md_allocations: float
    additional_days_allocations: float
    pool: float


def trailing_shared_md_amount(physician: PartnerToRetire, rules: EngineRules) -> float:
    if physician.trailing_shared_md_amount is not None:
        return physician.trailing_shared_md_amount
    return rules.medical_director.default_trailing_shared_md_amount


def _is_prior_year_retiree(physician: PhysicianBase) -> bool:
    return isinstance(physician, PartnerToRetire) and physician.retired_prior_year


def _employee_cost(physician: PhysicianBase, year: int, growth: float, rules: EngineRules) -> float:
    if get_employee_portion_of_year(physician) <= 0:
        return 0.0
    prorated = physician.model_copy(update={"salary": prorated_salary(physician)})
    return calculate_employee_total_cost(prorated, year, growth, rules)


def summarize_pool(
    future_year: FutureYear,
    benefit_growth_pct: float = DEFAULT_BENEFIT_GROWTH_PCT,
    projection: Optional[ProjectionSettings] = None,
    rules: Optional[EngineRules] = None,
) -> tuple[PoolSummary, Dict[str, float], Dict[str, float]]:
    """Compute the pool plus per-partner direct allocations.

    Returns:
        (summary, md_allocations_by_id, additional_days_by_id)
    """
    rules = resolve_rules(rules)
    year = future_year.year
    physicians = future_year.physicians
    partners = [p for p in physicians if p.kind in PARTNER_TYPES]
    employees = [p for p in physicians if p.kind in EMPLOYEE_TYPES]

    total_employee_costs = sum(_employee_cost(e, year, benefit_growth_pct, rules) for e in employees)
    total_buyouts = sum(p.buyout_cost or 0 for p in partners if isinstance(p, PartnerToRetire))
    total_delayed_w2 = 0.0
    for p in physicians:
        if isinstance(p, EmployeeToPartner):
            delayed = calculate_delayed_w2_payment(p, year, rules)
            total_delayed_w2 += delayed.amount + delayed.taxes

    add_ons = get_income_add_ons(future_year, projection, rules)
    shared_md_income = add_ons["medical_director"]
    prcs_income = add_ons["prcs_medical_director"]

    md_allocations: Dict[str, float] = {}
    trailing_total = sum(
        trailing_shared_md_amount(p, rules) for p in partners if _is_prior_year_retiree(p)
    )
    for p in partners:
        if _is_prior_year_retiree(p):
            continue
        if p.has_medical_director_hours and p.medical_director_hours_percentage:
            md_allocations[p.id] = (p.medical_director_hours_percentage / 100) * shared_md_income

    prcs_director = resolve_prcs_director_id(future_year, rules)
    if prcs_director and prcs_income > 0:
        md_allocations[prcs_director] = md_allocations.get(prcs_director, 0.0) + prcs_income

    additional_days = {
        p.id: p.additional_days_worked
        for p in partners
        if p.additional_days_worked and p.additional_days_worked > 0
    }

    total_income = (future_year.therapy_income or 0) + sum(add_ons.values())
    total_costs = (
        future_year.non_employment_costs
        + future_year.non_md_employment_costs
        + future_year.misc_employment_costs
        + future_year.locum_costs
        + total_employee_costs
        + total_buyouts
        + total_delayed_w2
    )
    total_md = sum(md_allocations.values()) + trailing_total
    total_additional_days = sum(additional_days.values())

    base_pool = max(0.0, total_income - total_costs)
    pool = max(0.0, base_pool - total_md - total_additional_days)

    logger.debug(
        f"{year}: income {total_income:.2f}, costs {total_costs:.2f}, "
        f"md {total_md:.2f}, additional days {total_additional_days:.2f}, pool {pool:.2f} "
        f"({len(partners)} partners, {len(employees)} employees)"
    )

    summary = PoolSummary(
        total_income=total_income,
        total_costs=total_costs,
        md_allocations=total_md,
        additional_days_allocations=total_additional_days,
        pool=pool,
    )
    return summary, md_allocations, additional_days


def calculate_all_compensations(
    future_year: FutureYear,
    benefit_growth_pct: float = DEFAULT_BENEFIT_GROWTH_PCT,
    projection: Optional[ProjectionSettings] = None,
    include_retired: bool = False,
    exclude_w2_from_comp: bool = False,
    rules: Optional[EngineRules] = None,
) -> List[CompensationResult]:
    """Compensation for every physician on a projected year's roster.

    Args:
        future_year: Projected year with its roster
        benefit_growth_pct: Benefit cost growth for employee costs
        projection: Scenario projection defaults for income streams
        include_retired: Include prior-year retirees with zero FTE weight
        exclude_w2_from_comp: Track partner W2 in the breakdown only
        rules: Engine rules (packaged defaults if omitted)
    """
    rules = resolve_rules(rules)
    year = future_year.year
    summary, md_allocations, additional_days = summarize_pool(
        future_year, benefit_growth_pct, projection, rules
    )

    partners = [p for p in future_year.physicians if p.kind in PARTNER_TYPES]
    weights = [(p, get_partner_fte_weight_proper(p)) for p in partners]
    total_weight = sum(w for _, w in weights) or 1

    results: List[CompensationResult] = []

    for partner, weight in weights:
        if isinstance(partner, PartnerToRetire) and weight == 0 and not include_retired:
            continue

        prior_year_retiree = _is_prior_year_retiree(partner)
        breakdown = CompensationBreakdown(
            fte_share=(weight / total_weight) * summary.pool,
            md_allocation=0.0 if prior_year_retiree else md_allocations.get(partner.id, 0.0),
            additional_days_allocation=additional_days.get(partner.id, 0.0),
            buyout=(partner.buyout_cost or 0) if isinstance(partner, PartnerToRetire) else 0.0,
            trailing_md=trailing_shared_md_amount(partner, rules) if prior_year_retiree else 0.0,
        )
        if isinstance(partner, EmployeeToPartner):
            breakdown.w2_salary = prorated_salary(partner)
            breakdown.delayed_w2 = calculate_delayed_w2_payment(partner, year, rules).amount

        comp = (breakdown.fte_share + breakdown.md_allocation + breakdown.additional_days_allocation
                + breakdown.buyout + breakdown.trailing_md)
        if not exclude_w2_from_comp:
            comp += breakdown.w2_salary + breakdown.delayed_w2

        results.append(CompensationResult(
            id=partner.id,
            name=partner.name,
            type=PhysicianType.PARTNER.value,
            comp=comp,
            breakdown=breakdown,
        ))

    for employee in future_year.physicians:
        if employee.kind not in EMPLOYEE_TYPES or employee.kind == PhysicianType.EMPLOYEE_TO_PARTNER:
            continue
        w2_salary = prorated_salary(employee)
        results.append(CompensationResult(
            id=employee.id,
            name=employee.name,
            type=employee.kind.value,
            comp=w2_salary,
            breakdown=CompensationBreakdown(w2_salary=w2_salary),
        ))

    return results
