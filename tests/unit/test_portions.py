"""Tests for employee/partner portions and FTE weights."""

import pytest

from practicecomp.sdk.employee import (
    get_employee_portion_of_year,
    get_partner_fte_weight,
    get_partner_fte_weight_proper,
    get_partner_portion_of_year,
    get_relative_fte_weights,
)
from practicecomp.sdk.schemas import (
    Employee,
    EmployeeToPartner,
    EmployeeToTerminate,
    NewEmployee,
    Partner,
    PartnerToRetire,
    parse_physician,
)


class TestEmployeePortion:
    """Tests for get_employee_portion_of_year."""

    def test_employee_full_year(self):
        assert get_employee_portion_of_year(Employee(id="E")) == 1

    def test_partner_none(self):
        assert get_employee_portion_of_year(Partner(id="P")) == 0

    def test_new_employee(self):
        assert get_employee_portion_of_year(NewEmployee(start_portion_of_year=0.5)) == 0.5
        assert get_employee_portion_of_year(NewEmployee()) == 1

    def test_employee_to_terminate(self):
        assert get_employee_portion_of_year(EmployeeToTerminate(terminate_portion_of_year=0.25)) == 0.25
        assert get_employee_portion_of_year(EmployeeToTerminate()) == 1

    def test_employee_to_partner_defaults_midyear(self):
        assert get_employee_portion_of_year(EmployeeToPartner()) == 0.5
        assert get_employee_portion_of_year(EmployeeToPartner(employee_portion_of_year=0.2)) == 0.2

    def test_employee_to_partner_clamped(self):
        assert get_employee_portion_of_year(EmployeeToPartner(employee_portion_of_year=1.4)) == 1
        assert get_employee_portion_of_year(EmployeeToPartner(employee_portion_of_year=-0.1)) == 0


class TestPartnerPortion:
    """Tests for get_partner_portion_of_year."""

    def test_partner_full_year(self):
        assert get_partner_portion_of_year(Partner()) == 1

    def test_employee_to_partner_remainder(self):
        physician = EmployeeToPartner(employee_portion_of_year=0.25)
        assert get_partner_portion_of_year(physician) == 0.75

    def test_partner_to_retire(self):
        assert get_partner_portion_of_year(PartnerToRetire(partner_portion_of_year=0.3)) == 0.3
        assert get_partner_portion_of_year(PartnerToRetire()) == 0.5
        assert get_partner_portion_of_year(PartnerToRetire(partner_portion_of_year=0)) == 0

    @pytest.mark.parametrize("physician", [Employee(), NewEmployee(), EmployeeToTerminate()])
    def test_employee_types_have_no_partner_time(self, physician):
        assert get_partner_portion_of_year(physician) == 0

    def test_portions_sum_to_one_for_transitions(self):
        physician = EmployeeToPartner(employee_portion_of_year=0.37)
        total = get_employee_portion_of_year(physician) + get_partner_portion_of_year(physician)
        assert total == pytest.approx(1)


class TestStrayFields:
    """Fields from other variants are ignored by dispatch."""

    def test_partner_with_start_portion(self):
        physician = parse_physician({"type": "partner", "id": "P", "startPortionOfYear": 0.5})
        assert isinstance(physician, Partner)
        assert get_employee_portion_of_year(physician) == 0
        assert get_partner_portion_of_year(physician) == 1


class TestFteWeights:
    """Tests for vacation-adjusted FTE."""

    def test_simple_weight(self):
        physician = Partner(weeks_vacation=13)
        assert get_partner_fte_weight(physician) == pytest.approx(0.75)

    def test_proper_weight_full_year(self):
        physician = Partner(weeks_vacation=13)
        assert get_partner_fte_weight_proper(physician) == pytest.approx(39 / 52)

    def test_proper_weight_partial_year(self):
        """Vacation comes out of the partner period, not the whole year."""
        physician = EmployeeToPartner(employee_portion_of_year=0.5, weeks_vacation=10)
        assert get_partner_fte_weight_proper(physician) == pytest.approx(16 / 52)
        assert get_partner_fte_weight(physician) == pytest.approx((42 / 52) * 0.5)

    def test_proper_weight_never_negative(self):
        physician = PartnerToRetire(partner_portion_of_year=0.1, weeks_vacation=20)
        assert get_partner_fte_weight_proper(physician) == 0

    def test_vacation_capped(self):
        physician = Partner(weeks_vacation=40)
        assert get_partner_fte_weight_proper(physician) == pytest.approx(28 / 52)

    def test_relative_weights(self):
        roster = [
            Partner(id="A", weeks_vacation=0),
            Partner(id="B", weeks_vacation=26 / 2),
            Employee(id="C"),
        ]
        weights = get_relative_fte_weights(roster)
        assert weights == {"A": 1.0, "B": pytest.approx(0.75)}

    def test_relative_weights_empty_without_partners(self):
        assert get_relative_fte_weights([Employee(id="C")]) == {}
