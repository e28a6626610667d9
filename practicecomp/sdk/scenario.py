"""Scenario file loading.

A scenario YAML holds projection settings and one entry per projected
year with its physician roster. Keys may be snake_case or the camelCase
the scenario store persists.

Example:
    name: Scenario A
    projection:
      benefit_costs_growth_pct: 7.2
    future_years:
      - year: 2026
        therapy_income: 3200000
        physicians:
          - {id: 2026-MC, name: Connor, type: partner, weeks_vacation: 8}
"""

import logging
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from .config import format_validation_errors, resolve_rules
from .schemas import EngineRules, FutureYear, Scenario, YearRow

logger = logging.getLogger(__name__)


class ScenarioError(Exception):
    """Raised when a scenario file is missing or invalid."""
    pass


def load_scenario(path: Path) -> Scenario:
    """Load and validate a scenario YAML file.

    Raises:
        ScenarioError: If the file is missing, not YAML, or fails validation
    """
    path = Path(path)
    if not path.exists():
        raise ScenarioError(f"Scenario file not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ScenarioError(f"{path}: invalid YAML: {e}") from e

    try:
        scenario = Scenario.model_validate(data)
    except ValidationError as e:
        raise ScenarioError(f"{path}: {'; '.join(format_validation_errors(e))}") from e

    logger.debug(f"loaded scenario '{scenario.name}' with {len(scenario.future_years)} years")
    return scenario


def get_year_data(
    scenario: Optional[Scenario],
    year: int,
    rules: Optional[EngineRules] = None,
) -> Optional[Union[YearRow, FutureYear]]:
    """Projected year from the scenario, else the historic row for that year."""
    if scenario is not None:
        future_year = scenario.get_year(year)
        if future_year is not None:
            return future_year
    return resolve_rules(rules).historic_year(year)
