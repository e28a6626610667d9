"""Pydantic schemas for practice-comp records and engine rules.

Physician records are a discriminated union on ``type``. Each variant only
declares the fields that apply to it; stray fields from other variants are
ignored rather than rejected, so partially-edited records from the scenario
store still load. Field names are snake_case but the camelCase spelling the
scenario store persists is accepted as an alias.
"""

from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Dict, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_serializer, field_validator
from pydantic.alias_generators import to_camel


# =============================================================================
# Physician roster
# =============================================================================


class PhysicianType(str, Enum):
    """Employment state of a physician within one calendar year."""

    NEW_EMPLOYEE = "newEmployee"
    EMPLOYEE = "employee"
    EMPLOYEE_TO_TERMINATE = "employeeToTerminate"
    EMPLOYEE_TO_PARTNER = "employeeToPartner"
    PARTNER = "partner"
    PARTNER_TO_RETIRE = "partnerToRetire"


# Types that carry W2 (employee) payroll for some part of the year
EMPLOYEE_TYPES = frozenset({
    PhysicianType.EMPLOYEE,
    PhysicianType.EMPLOYEE_TO_PARTNER,
    PhysicianType.NEW_EMPLOYEE,
    PhysicianType.EMPLOYEE_TO_TERMINATE,
})

# Types that share in the partner pool for some part of the year
PARTNER_TYPES = frozenset({
    PhysicianType.PARTNER,
    PhysicianType.EMPLOYEE_TO_PARTNER,
    PhysicianType.PARTNER_TO_RETIRE,
})


class PhysicianBase(BaseModel):
    """Fields shared by every physician variant."""

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = ""
    name: str = ""
    salary: Optional[float] = Field(default=None, description="Annual FTE salary")
    bonus_amount: Optional[float] = Field(default=None, description="Relocation/signing bonus")
    receives_benefits: bool = False
    receives_bonuses: bool = False
    weeks_vacation: Optional[float] = None
    employee_weeks_vacation: Optional[float] = None
    has_medical_director_hours: bool = False
    medical_director_hours_percentage: Optional[float] = None
    additional_days_worked: Optional[float] = Field(
        default=None, description="Dollar value of internal locum days"
    )

    @property
    def kind(self) -> PhysicianType:
        return PhysicianType(self.type)


class NewEmployee(PhysicianBase):
    type: Literal["newEmployee"] = "newEmployee"
    start_portion_of_year: Optional[float] = Field(
        default=None, description="Fraction of the year elapsed before the start date"
    )


class Employee(PhysicianBase):
    type: Literal["employee"] = "employee"


class EmployeeToTerminate(PhysicianBase):
    type: Literal["employeeToTerminate"] = "employeeToTerminate"
    terminate_portion_of_year: Optional[float] = Field(
        default=None, description="Fraction of the year worked before termination"
    )


class EmployeeToPartner(PhysicianBase):
    type: Literal["employeeToPartner"] = "employeeToPartner"
    employee_portion_of_year: Optional[float] = Field(
        default=None, description="Fraction of the year as employee; remainder is partner"
    )
    partner_weeks_vacation: Optional[float] = None


class Partner(PhysicianBase):
    type: Literal["partner"] = "partner"


class PartnerToRetire(PhysicianBase):
    type: Literal["partnerToRetire"] = "partnerToRetire"
    partner_portion_of_year: Optional[float] = Field(
        default=None,
        description="Fraction of the year as active partner; 0 = retired prior year",
    )
    buyout_cost: Optional[float] = None
    trailing_shared_md_amount: Optional[float] = None

    @property
    def retired_prior_year(self) -> bool:
        return (self.partner_portion_of_year or 0) == 0


Physician = Annotated[
    Union[NewEmployee, Employee, EmployeeToTerminate, EmployeeToPartner, Partner, PartnerToRetire],
    Field(discriminator="type"),
]

_physician_adapter = TypeAdapter(Physician)
_roster_adapter = TypeAdapter(List[Physician])


def parse_physician(data: dict) -> PhysicianBase:
    """Build the physician variant named by data['type']."""
    return _physician_adapter.validate_python(data)


def parse_physicians(data: list) -> List[PhysicianBase]:
    """Build a roster from a list of physician dicts."""
    return _roster_adapter.validate_python(data)


# =============================================================================
# Year data
# =============================================================================


class YearRow(BaseModel):
    """Historic actuals for one closed year."""

    model_config = ConfigDict(extra="forbid", frozen=True, alias_generator=to_camel, populate_by_name=True)

    year: int
    therapy_income: float
    non_employment_costs: float = 0
    employee_payroll: Optional[float] = None
    description: Optional[str] = None


class FutureYear(BaseModel):
    """Projected year within a scenario.

    ``prcs_director_physician_id`` left unset means "use the default
    director"; an explicit ``None`` means the role was deselected.
    """

    model_config = ConfigDict(extra="ignore", alias_generator=to_camel, populate_by_name=True)

    year: int
    therapy_income: float = 0
    non_employment_costs: float = 0
    non_md_employment_costs: float = 0
    locum_costs: float = 0
    misc_employment_costs: float = 0
    medical_director_hours: Optional[float] = None
    prcs_medical_director_hours: Optional[float] = None
    consulting_services_agreement: Optional[float] = None
    prcs_director_physician_id: Optional[str] = None
    physicians: List[Physician] = Field(default_factory=list)


class ProjectionSettings(BaseModel):
    """Scenario-level growth rates and income projection defaults.

    The engine reads benefit_costs_growth_pct and the three income
    defaults (medical_director_hours, prcs_medical_director_hours,
    consulting_services_agreement). The other growth rates and
    locums_costs are persisted with the scenario for the projection grid
    and are ignored by every calculation here.
    """

    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)

    income_growth_pct: float = 3.7
    non_employment_costs_pct: float = 5.7
    non_md_employment_costs_pct: float = 2.4
    misc_employment_costs_pct: float = 3.2
    benefit_costs_growth_pct: float = 7.2
    medical_director_hours: Optional[float] = None
    prcs_medical_director_hours: Optional[float] = None
    consulting_services_agreement: Optional[float] = None
    locums_costs: Optional[float] = None


class Scenario(BaseModel):
    """A named projection: settings plus one FutureYear per projected year."""

    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)

    name: str = "Default"
    projection: ProjectionSettings = Field(default_factory=ProjectionSettings)
    future_years: List[FutureYear] = Field(default_factory=list)

    def get_year(self, year: int) -> Optional[FutureYear]:
        for fy in self.future_years:
            if fy.year == year:
                return fy
        return None


# =============================================================================
# Engine rules
# =============================================================================


class PayrollTaxRules(BaseModel):
    """Employer-side statutory payroll tax rates and wage bases."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    federal_unemployment_rate: float = Field(..., ge=0, le=1, description="FUTA rate")
    federal_unemployment_wage_base: float = Field(..., ge=0, description="FUTA taxable wage cap")
    social_security_rate: float = Field(..., ge=0, le=1, description="Employer SS rate")
    medicare_rate: float = Field(..., ge=0, le=1, description="Employer Medicare rate (uncapped)")
    state_unemployment_rate: float = Field(..., ge=0, le=1)
    state_unemployment_wage_base: float = Field(..., ge=0)
    state_family_leave_rate: float = Field(..., ge=0, le=1, description="Capped at SS wage base")
    state_disability_rate: float = Field(..., ge=0, le=1)
    state_minor_rate: float = Field(..., ge=0, le=1, description="B&O-style rate on all wages")
    social_security_wage_bases: Mapping[int, float]

    @field_validator("social_security_wage_bases")
    @classmethod
    def _freeze_wage_bases(cls, value: Mapping[int, float]) -> Mapping[int, float]:
        if not value:
            raise ValueError("at least one year is required")
        return MappingProxyType(dict(value))

    @field_serializer("social_security_wage_bases")
    def _dump_wage_bases(self, value: Mapping[int, float]) -> Dict[int, float]:
        return dict(value)

    def social_security_wage_base(self, year: int) -> float:
        """SS wage base for a year, clamped to the tabulated range."""
        bases = self.social_security_wage_bases
        if year in bases:
            return bases[year]
        if year > max(bases):
            return bases[max(bases)]
        return bases[min(bases)]



class BenefitRules(BaseModel):
    """Monthly benefit premiums for the base year."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_year: int = Field(..., description="Year the monthly premiums apply to")
    monthly_medical: float = Field(..., ge=0)
    monthly_dental: float = Field(..., ge=0)
    monthly_vision: float = Field(..., ge=0)

    @property
    def annual_cost(self) -> float:
        """Full-year benefit cost in the base year."""
        return (self.monthly_medical + self.monthly_dental + self.monthly_vision) * 12


class IncomeAddOns(BaseModel):
    """Non-therapy income streams for one year."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    medical_director: float = Field(..., ge=0)
    prcs_medical_director: float = Field(..., ge=0)
    consulting_services: float = Field(..., ge=0)


class IncomeRules(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    historic_total_income_through: int = Field(
        ..., description="Last year whose therapy income already includes every stream"
    )
    actuals: Mapping[int, IncomeAddOns]
    projection: IncomeAddOns
    default_prcs_director_name: Optional[str] = None
    prcs_default_from_year: int = 2024

    @field_validator("actuals")
    @classmethod
    def _freeze_actuals(cls, value: Mapping[int, IncomeAddOns]) -> Mapping[int, IncomeAddOns]:
        return MappingProxyType(dict(value))

    @field_serializer("actuals")
    def _dump_actuals(self, value: Mapping[int, IncomeAddOns]) -> Dict[int, IncomeAddOns]:
        return dict(value)

    def actuals_for(self, year: int) -> IncomeAddOns:
        """Actual add-on income for a historic year, nearest tabulated year otherwise."""
        if year in self.actuals:
            return self.actuals[year]
        if self.actuals and year > max(self.actuals):
            return self.actuals[max(self.actuals)]
        if self.actuals:
            return self.actuals[min(self.actuals)]
        return self.projection


class MedicalDirectorRules(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    default_trailing_shared_md_amount: float = Field(..., ge=0)


class PayrollCalendarRules(BaseModel):
    """Bi-weekly payroll cadence anchored at a known pay period."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    reference_pay_date: date
    reference_period_end: date
    period_days: int = Field(default=14, gt=0)
    hours_per_day: float = Field(default=8, gt=0)
    days_per_week: int = Field(default=5, gt=0)
    weeks_per_year: int = Field(default=52, gt=0)

    @property
    def annual_work_hours(self) -> float:
        return self.weeks_per_year * self.days_per_week * self.hours_per_day


class DelayedW2Override(BaseModel):
    """Fixed cross-year W2 figures for one physician and year."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    physician_id: str
    year: int
    amount: float = Field(..., ge=0)
    taxes: float = Field(..., ge=0)
    details: str = ""


class StaffMember(BaseModel):
    """Non-physician staff position used for default non-MD employment costs."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    role: str
    hourly_rate: float = Field(..., ge=0)
    hours_per_week: float = Field(..., ge=0)
    receives_benefits: bool = False

    @property
    def annual_wages(self) -> float:
        return self.hourly_rate * self.hours_per_week * 52


class EngineRules(BaseModel):
    """Complete, read-only configuration for the calculation engine."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    payroll_taxes: PayrollTaxRules
    benefits: BenefitRules
    income: IncomeRules
    medical_director: MedicalDirectorRules
    payroll_calendar: PayrollCalendarRules
    delayed_w2_overrides: Tuple[DelayedW2Override, ...] = ()
    staff: Tuple[StaffMember, ...] = ()
    historic_years: Tuple[YearRow, ...] = ()

    def find_delayed_w2_override(self, physician_id: str, year: int) -> Optional[DelayedW2Override]:
        for override in self.delayed_w2_overrides:
            if override.physician_id == physician_id and override.year == year:
                return override
        return None

    def historic_year(self, year: int) -> Optional[YearRow]:
        for row in self.historic_years:
            if row.year == year:
                return row
        return None
