"""Portion-of-year and FTE weighting for physicians.

Every physician variant splits the calendar year into an employee portion
and a partner portion. Missing portion fields default per variant; these
functions never raise for a structurally valid physician.
"""

import logging
from typing import Dict, Sequence

from ..calendar import clamp
from ..schemas import (
    EmployeeToPartner,
    EmployeeToTerminate,
    NewEmployee,
    PartnerToRetire,
    PhysicianBase,
    PhysicianType,
)

logger = logging.getLogger(__name__)

WEEKS_PER_YEAR = 52
# Historic data carries up to 24 weeks of vacation
MAX_WEEKS_VACATION = 24

DEFAULT_TRANSITION_PORTION = 0.5


def get_employee_portion_of_year(physician: PhysicianBase) -> float:
    """Fraction of the year worked as a W2 employee."""
    kind = physician.kind

    if kind == PhysicianType.EMPLOYEE:
        return 1.0
    if kind == PhysicianType.PARTNER:
        return 0.0
    if isinstance(physician, NewEmployee):
        start = physician.start_portion_of_year
        return 1 - (start if start is not None else 0.0)
    if isinstance(physician, EmployeeToTerminate):
        terminate = physician.terminate_portion_of_year
        return terminate if terminate is not None else 1.0

    # employeeToPartner, and the fallback for anything else
    value = getattr(physician, "employee_portion_of_year", None)
    if value is None:
        value = DEFAULT_TRANSITION_PORTION
    return clamp(value, 0.0, 1.0)


def get_partner_portion_of_year(physician: PhysicianBase) -> float:
    """Fraction of the year worked as an active partner."""
    kind = physician.kind

    if kind == PhysicianType.PARTNER:
        return 1.0
    if isinstance(physician, EmployeeToPartner):
        return 1 - get_employee_portion_of_year(physician)
    if isinstance(physician, PartnerToRetire):
        portion = physician.partner_portion_of_year
        return portion if portion is not None else DEFAULT_TRANSITION_PORTION
    return 0.0


def _weeks_vacation(physician: PhysicianBase) -> float:
    return clamp(physician.weeks_vacation or 0, 0, MAX_WEEKS_VACATION)


def get_partner_fte_weight(physician: PhysicianBase) -> float:
    """Vacation-scaled FTE times partner portion.

    Treats vacation as spread over the whole year. Use
    get_partner_fte_weight_proper when the partner period is partial.
    """
    base_fte = 1 - _weeks_vacation(physician) / WEEKS_PER_YEAR
    return base_fte * get_partner_portion_of_year(physician)


def get_partner_fte_weight_proper(physician: PhysicianBase) -> float:
    """FTE fraction with vacation taken inside the active partner period.

    Returns:
        max(0, partner_portion * 52 - weeks_vacation) / 52, or 0 for
        physicians with no partner time.
    """
    partner_portion = get_partner_portion_of_year(physician)
    if partner_portion == 0:
        return 0.0

    partner_weeks = partner_portion * WEEKS_PER_YEAR
    effective_weeks = max(0.0, partner_weeks - _weeks_vacation(physician))
    return effective_weeks / WEEKS_PER_YEAR


def get_relative_fte_weights(physicians: Sequence[PhysicianBase]) -> Dict[str, float]:
    """Each partner's FTE weight relative to the largest in the roster.

    Returns:
        Mapping of physician id -> weight / max weight. Empty when no one
        has partner time.
    """
    weights = {p.id: get_partner_fte_weight_proper(p) for p in physicians}
    max_weight = max(weights.values(), default=0.0)
    if max_weight <= 0:
        logger.debug("relative FTE: no partner time in roster")
        return {}
    return {pid: w / max_weight for pid, w in weights.items() if w > 0}
