"""Total practice income per year.

Through the historic cutoff (2023) therapy income already is total gross
income. From 2024 on, total income adds shared medical director, PRCS
medical director and consulting services income:

- Historic rows (YearRow): add-ons are the recorded actuals for the year.
- Projected rows (FutureYear): the year's own value, else the scenario
  projection default, else the engine default. PRCS income only counts
  when a PRCS director is assigned for the year.
"""

import logging
from typing import Optional, Union

from .config import resolve_rules
from .schemas import (
    PARTNER_TYPES,
    EngineRules,
    FutureYear,
    ProjectionSettings,
    YearRow,
)

logger = logging.getLogger(__name__)


def resolve_prcs_director_id(
    future_year: FutureYear,
    rules: Optional[EngineRules] = None,
) -> Optional[str]:
    """PRCS director for a projected year.

    An explicitly set prcs_director_physician_id wins, including an
    explicit None (role deselected). Otherwise the configured default
    director is used when a partner-type physician by that name is on the
    roster.
    """
    if "prcs_director_physician_id" in future_year.model_fields_set:
        return future_year.prcs_director_physician_id

    income = resolve_rules(rules).income
    if not income.default_prcs_director_name or future_year.year < income.prcs_default_from_year:
        return None

    for physician in future_year.physicians:
        if physician.name == income.default_prcs_director_name and physician.kind in PARTNER_TYPES:
            return physician.id
    return None


def _first_set(*values: Optional[float]) -> float:
    for value in values:
        if value is not None:
            return value
    return 0.0


def get_income_add_ons(
    year_data: Union[YearRow, FutureYear],
    projection: Optional[ProjectionSettings] = None,
    rules: Optional[EngineRules] = None,
) -> dict:
    """Non-therapy income streams for a year.

    Returns:
        Dict with medical_director, prcs_medical_director, consulting_services
    """
    income = resolve_rules(rules).income

    if year_data.year <= income.historic_total_income_through:
        return {"medical_director": 0.0, "prcs_medical_director": 0.0, "consulting_services": 0.0}

    if isinstance(year_data, YearRow):
        actuals = income.actuals_for(year_data.year)
        return {
            "medical_director": actuals.medical_director,
            "prcs_medical_director": actuals.prcs_medical_director,
            "consulting_services": actuals.consulting_services,
        }

    projection = projection or ProjectionSettings()
    medical_director = _first_set(
        year_data.medical_director_hours,
        projection.medical_director_hours,
        income.projection.medical_director,
    )

    prcs = 0.0
    if resolve_prcs_director_id(year_data, rules):
        prcs = _first_set(
            year_data.prcs_medical_director_hours,
            projection.prcs_medical_director_hours,
            income.projection.prcs_medical_director,
        )
    else:
        logger.debug(f"{year_data.year}: no PRCS director assigned, PRCS income excluded")

    consulting = _first_set(
        year_data.consulting_services_agreement,
        projection.consulting_services_agreement,
        income.projection.consulting_services,
    )

    return {
        "medical_director": medical_director,
        "prcs_medical_director": prcs,
        "consulting_services": consulting,
    }


def get_total_income(
    year_data: Union[YearRow, FutureYear],
    projection: Optional[ProjectionSettings] = None,
    rules: Optional[EngineRules] = None,
) -> float:
    """Total gross income for a historic or projected year."""
    if year_data.year <= resolve_rules(rules).income.historic_total_income_through:
        return year_data.therapy_income

    add_ons = get_income_add_ons(year_data, projection, rules)
    return (year_data.therapy_income or 0) + sum(add_ons.values())
