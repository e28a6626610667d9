"""Tests for scenario file loading and physician parsing."""

import pytest
import yaml

from practicecomp.sdk.scenario import ScenarioError, get_year_data, load_scenario
from practicecomp.sdk.schemas import (
    EmployeeToPartner,
    FutureYear,
    Partner,
    PhysicianType,
    YearRow,
    parse_physicians,
)


# === TEST CONSTANTS ===

TEST_SCENARIO = {
    "name": "Scenario A",
    "projection": {"benefitCostsGrowthPct": 6.0},
    "futureYears": [{
        "year": 2026,
        "therapyIncome": 3200000,
        "physicians": [
            {"id": "2026-MC", "name": "Connor", "type": "partner", "weeksVacation": 8},
            {"id": "2026-T", "name": "Tran", "type": "employeeToPartner",
             "employeePortionOfYear": 0.25, "salary": 500000},
        ],
    }],
}


@pytest.fixture
def scenario_file(tmp_path):
    path = tmp_path / "scenario.yaml"
    path.write_text(yaml.dump(TEST_SCENARIO))
    return path


class TestLoadScenario:
    """Tests for load_scenario."""

    def test_camel_case_keys(self, scenario_file):
        scenario = load_scenario(scenario_file)

        assert scenario.name == "Scenario A"
        assert scenario.projection.benefit_costs_growth_pct == 6.0
        assert scenario.projection.income_growth_pct == 3.7

        future_year = scenario.get_year(2026)
        assert future_year.therapy_income == 3200000
        assert isinstance(future_year.physicians[0], Partner)
        assert isinstance(future_year.physicians[1], EmployeeToPartner)
        assert future_year.physicians[1].employee_portion_of_year == 0.25

    def test_missing_year(self, scenario_file):
        assert load_scenario(scenario_file).get_year(2030) is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(ScenarioError, match="not found"):
            load_scenario(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("name: [unclosed\n")
        with pytest.raises(ScenarioError, match="invalid YAML"):
            load_scenario(path)

    def test_unknown_physician_type(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({
            "futureYears": [{"year": 2026, "physicians": [{"id": "X", "type": "contractor"}]}],
        }))
        with pytest.raises(ScenarioError, match="physicians"):
            load_scenario(path)


class TestYearData:
    """Tests for get_year_data."""

    def test_projected_year(self, scenario_file):
        scenario = load_scenario(scenario_file)
        assert isinstance(get_year_data(scenario, 2026), FutureYear)

    def test_historic_fallback(self, scenario_file):
        scenario = load_scenario(scenario_file)
        row = get_year_data(scenario, 2020)
        assert isinstance(row, YearRow)
        assert row.therapy_income == 2535945

    def test_without_scenario(self):
        assert get_year_data(None, 2022).year == 2022

    def test_unknown_year(self):
        assert get_year_data(None, 1990) is None


class TestParsePhysicians:

    def test_dispatch_on_type(self):
        roster = parse_physicians([
            {"type": "newEmployee", "startPortionOfYear": 0.5},
            {"type": "partnerToRetire", "partner_portion_of_year": 0, "buyoutCost": 1000},
        ])
        assert roster[0].kind == PhysicianType.NEW_EMPLOYEE
        assert roster[1].retired_prior_year is True
        assert roster[1].buyout_cost == 1000
