"""Practice Comp SDK - compensation and proration calculation engine."""

from .config import (
    get_config_dir,
    get_rules_path,
    get_default_rules,
    load_engine_rules,
    RulesNotFoundError,
    RulesValidationError,
)

from .schemas import (
    PhysicianType,
    Physician,
    PhysicianBase,
    NewEmployee,
    Employee,
    EmployeeToTerminate,
    EmployeeToPartner,
    Partner,
    PartnerToRetire,
    YearRow,
    FutureYear,
    ProjectionSettings,
    Scenario,
    EngineRules,
    parse_physician,
    parse_physicians,
)

from .taxes import (
    calculate_employer_payroll_taxes,
    calculate_employer_payroll_tax_breakdown,
    get_social_security_wage_base,
    round_dollars,
)

from .employee import (
    get_employee_portion_of_year,
    get_partner_portion_of_year,
    get_partner_fte_weight,
    get_partner_fte_weight_proper,
    get_relative_fte_weights,
    get_benefit_costs_for_year,
    get_prorated_benefits,
    calculate_employee_total_cost,
    get_employee_cost_breakdown,
)

from .w2 import (
    calculate_delayed_w2_payment,
    DelayedW2Payment,
)

from .income import (
    get_total_income,
    get_income_add_ons,
    resolve_prcs_director_id,
)

from .medical_director import calculate_medical_director_hour_percentages

from .costs import (
    calculate_guaranteed_payments,
    calculate_locums_salary,
    calculate_md_associates_costs,
    compute_default_non_md_employment_costs,
    MDAssociatesCosts,
)

from .compensation import (
    calculate_all_compensations,
    CompensationResult,
)

from .scenario import (
    load_scenario,
    get_year_data,
    ScenarioError,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_rules_path",
    "get_default_rules",
    "load_engine_rules",
    "RulesNotFoundError",
    "RulesValidationError",
    # Schemas
    "PhysicianType",
    "Physician",
    "PhysicianBase",
    "NewEmployee",
    "Employee",
    "EmployeeToTerminate",
    "EmployeeToPartner",
    "Partner",
    "PartnerToRetire",
    "YearRow",
    "FutureYear",
    "ProjectionSettings",
    "Scenario",
    "EngineRules",
    "parse_physician",
    "parse_physicians",
    # Payroll taxes
    "calculate_employer_payroll_taxes",
    "calculate_employer_payroll_tax_breakdown",
    "get_social_security_wage_base",
    "round_dollars",
    # Portions, FTE, benefits
    "get_employee_portion_of_year",
    "get_partner_portion_of_year",
    "get_partner_fte_weight",
    "get_partner_fte_weight_proper",
    "get_relative_fte_weights",
    "get_benefit_costs_for_year",
    "get_prorated_benefits",
    "calculate_employee_total_cost",
    "get_employee_cost_breakdown",
    # Delayed W2
    "calculate_delayed_w2_payment",
    "DelayedW2Payment",
    # Income
    "get_total_income",
    "get_income_add_ons",
    "resolve_prcs_director_id",
    # Medical director
    "calculate_medical_director_hour_percentages",
    # Costs
    "calculate_guaranteed_payments",
    "calculate_locums_salary",
    "calculate_md_associates_costs",
    "compute_default_non_md_employment_costs",
    "MDAssociatesCosts",
    # Compensation
    "calculate_all_compensations",
    "CompensationResult",
    # Scenario files
    "load_scenario",
    "get_year_data",
    "ScenarioError",
]
