"""Tests for partner compensation distribution."""

import pytest

from practicecomp.sdk.compensation import calculate_all_compensations, summarize_pool
from practicecomp.sdk.schemas import (
    Employee,
    EmployeeToPartner,
    FutureYear,
    Partner,
    PartnerToRetire,
)


# === TEST CONSTANTS ===

TEST_YEAR = 2026
TEST_THERAPY_INCOME = 1000000
# 100000 salary + 2026 employer taxes (9290.20)
TEST_EMPLOYEE_COST = 109290.2


def make_future_year(physicians, **kwargs):
    """Projected year with every add-on income stream zeroed."""
    fields = dict(
        year=TEST_YEAR,
        therapy_income=TEST_THERAPY_INCOME,
        medical_director_hours=0,
        prcs_medical_director_hours=0,
        consulting_services_agreement=0,
        prcs_director_physician_id=None,
        physicians=physicians,
    )
    fields.update(kwargs)
    return FutureYear(**fields)


def by_id(results):
    return {r.id: r for r in results}


@pytest.fixture
def base_roster():
    return [
        Partner(id="A", name="Alpha", weeks_vacation=0),
        Partner(id="B", name="Beta", weeks_vacation=0),
        Employee(id="E", name="Echo", salary=100000),
    ]


class TestPool:
    """Tests for summarize_pool."""

    def test_pool_is_income_minus_costs(self, base_roster):
        summary, md_allocations, additional_days = summarize_pool(make_future_year(base_roster))

        assert summary.total_income == TEST_THERAPY_INCOME
        assert summary.total_costs == pytest.approx(TEST_EMPLOYEE_COST)
        assert summary.pool == pytest.approx(TEST_THERAPY_INCOME - TEST_EMPLOYEE_COST)
        assert md_allocations == {}
        assert additional_days == {}

    def test_pool_never_negative(self, base_roster):
        future_year = make_future_year(base_roster, non_employment_costs=5000000)
        summary, _, _ = summarize_pool(future_year)
        assert summary.pool == 0


class TestCompensation:
    """Tests for calculate_all_compensations."""

    def test_equal_partners_split_pool(self, base_roster):
        results = by_id(calculate_all_compensations(make_future_year(base_roster)))
        expected_share = (TEST_THERAPY_INCOME - TEST_EMPLOYEE_COST) / 2

        assert results["A"].comp == pytest.approx(expected_share)
        assert results["B"].comp == pytest.approx(expected_share)
        assert results["A"].type == "partner"

    def test_employee_paid_salary(self, base_roster):
        results = by_id(calculate_all_compensations(make_future_year(base_roster)))

        assert results["E"].comp == 100000
        assert results["E"].type == "employee"
        assert results["E"].breakdown.w2_salary == 100000

    def test_vacation_reduces_share(self):
        roster = [Partner(id="A", weeks_vacation=0), Partner(id="B", weeks_vacation=13)]
        results = by_id(calculate_all_compensations(make_future_year(roster)))
        # weights 1 and 0.75
        assert results["A"].comp == pytest.approx(TEST_THERAPY_INCOME * 4 / 7)
        assert results["B"].comp == pytest.approx(TEST_THERAPY_INCOME * 3 / 7)

    def test_medical_director_allocation(self, base_roster):
        roster = [
            p.model_copy(update={"has_medical_director_hours": True, "medical_director_hours_percentage": 50})
            if isinstance(p, Partner) else p
            for p in base_roster
        ]
        future_year = make_future_year(roster, medical_director_hours=100000)
        results = by_id(calculate_all_compensations(future_year))
        expected_share = (TEST_THERAPY_INCOME - TEST_EMPLOYEE_COST) / 2

        assert results["A"].breakdown.md_allocation == pytest.approx(50000)
        assert results["A"].breakdown.fte_share == pytest.approx(expected_share)
        assert results["A"].comp == pytest.approx(expected_share + 50000)

    def test_prcs_director_allocation(self, base_roster):
        future_year = make_future_year(base_roster, prcs_medical_director_hours=40000, prcs_director_physician_id="B")
        results = by_id(calculate_all_compensations(future_year))

        assert results["B"].breakdown.md_allocation == pytest.approx(40000)
        assert results["A"].breakdown.md_allocation == 0

    def test_additional_days_paid_directly(self, base_roster):
        roster = [base_roster[0].model_copy(update={"additional_days_worked": 10000})] + base_roster[1:]
        results = by_id(calculate_all_compensations(make_future_year(roster)))
        expected_share = (TEST_THERAPY_INCOME - TEST_EMPLOYEE_COST - 10000) / 2

        assert results["A"].comp == pytest.approx(expected_share + 10000)
        assert results["B"].comp == pytest.approx(expected_share)


class TestRetirees:
    """Tests for partners retiring in or before the year."""

    def make_roster(self, base_roster):
        return base_roster + [PartnerToRetire(id="R", name="Retired", partner_portion_of_year=0, buyout_cost=60000)]

    def test_prior_year_retiree_excluded_by_default(self, base_roster):
        results = by_id(calculate_all_compensations(make_future_year(self.make_roster(base_roster))))
        assert "R" not in results

    def test_prior_year_retiree_included(self, base_roster):
        future_year = make_future_year(self.make_roster(base_roster))
        results = by_id(calculate_all_compensations(future_year, include_retired=True))

        assert results["R"].breakdown.fte_share == 0
        assert results["R"].breakdown.buyout == 60000
        assert results["R"].breakdown.trailing_md == 2500
        assert results["R"].comp == pytest.approx(62500)

    def test_buyout_and_trailing_reduce_pool(self, base_roster):
        results = by_id(calculate_all_compensations(make_future_year(self.make_roster(base_roster))))
        expected_share = (TEST_THERAPY_INCOME - TEST_EMPLOYEE_COST - 60000 - 2500) / 2
        assert results["A"].comp == pytest.approx(expected_share)


class TestEmployeeToPartner:
    """Tests for partners with W2 time in the year."""

    def test_w2_salary_included_unless_excluded(self):
        roster = [
            Partner(id="A"),
            EmployeeToPartner(id="T", salary=200000, employee_portion_of_year=0.5),
        ]
        future_year = make_future_year(roster)

        included = by_id(calculate_all_compensations(future_year))
        excluded = by_id(calculate_all_compensations(future_year, exclude_w2_from_comp=True))

        assert included["T"].breakdown.w2_salary == 100000
        assert included["T"].comp - excluded["T"].comp == pytest.approx(100000)
        assert included["T"].type == "partner"


class TestRepeatability:
    """Identical inputs give identical distributions."""

    def test_same_future_year_twice(self, base_roster):
        roster = base_roster + [
            EmployeeToPartner(id="T", salary=400000, employee_portion_of_year=0.0, weeks_vacation=6),
            PartnerToRetire(id="R", partner_portion_of_year=0, buyout_cost=50000),
        ]
        future_year = make_future_year(roster, medical_director_hours=90000)

        first = calculate_all_compensations(future_year, 7.2, include_retired=True)
        second = calculate_all_compensations(future_year, 7.2, include_retired=True)

        assert first == second
        assert by_id(first)["T"].breakdown.delayed_w2 > 0

    def test_future_year_not_modified(self, base_roster):
        future_year = make_future_year(base_roster)
        snapshot = future_year.model_dump()
        calculate_all_compensations(future_year)
        assert future_year.model_dump() == snapshot
