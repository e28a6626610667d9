"""Medical director stipend allocation among partners.

The shared medical director stipend is split across active partners in
proportion to their partner portion of the year. Vacation is ignored for
this split.
"""

import logging
from typing import List, Sequence

from .employee.portions import get_partner_portion_of_year
from .schemas import PhysicianBase

logger = logging.getLogger(__name__)


def calculate_medical_director_hour_percentages(
    physicians: Sequence[PhysicianBase],
) -> List[PhysicianBase]:
    """Assign each physician's share (0-100) of medical director hours.

    Returns:
        New physician list with medical_director_hours_percentage and
        has_medical_director_hours set. Input physicians are untouched.
    """
    total_partner_portions = sum(get_partner_portion_of_year(p) for p in physicians)

    if total_partner_portions == 0:
        logger.debug("no partner time in roster, clearing medical director hours")
        return [
            p.model_copy(update={
                "medical_director_hours_percentage": 0.0,
                "has_medical_director_hours": False,
            })
            for p in physicians
        ]

    allocated = []
    for physician in physicians:
        partner_portion = get_partner_portion_of_year(physician)
        percentage = (partner_portion / total_partner_portions) * 100 if partner_portion > 0 else 0.0
        allocated.append(physician.model_copy(update={
            "medical_director_hours_percentage": percentage,
            "has_medical_director_hours": percentage > 0,
        }))
    return allocated


def total_medical_director_percentage(physicians: Sequence[PhysicianBase]) -> float:
    """Sum of assigned percentages across the roster."""
    return sum(p.medical_director_hours_percentage or 0 for p in physicians)
