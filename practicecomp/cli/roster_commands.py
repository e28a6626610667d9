"""Scenario roster commands: costs, medical director allocation, income, compensation."""

from dataclasses import asdict

import click

from practicecomp.sdk import (
    YearRow,
    calculate_all_compensations,
    calculate_delayed_w2_payment,
    calculate_guaranteed_payments,
    calculate_locums_salary,
    calculate_md_associates_costs,
    calculate_medical_director_hour_percentages,
    compute_default_non_md_employment_costs,
    get_employee_cost_breakdown,
    get_employee_portion_of_year,
    get_income_add_ons,
    get_partner_portion_of_year,
    get_total_income,
    get_year_data,
    resolve_prcs_director_id,
    round_dollars,
)
from practicecomp.sdk.costs import prorated_salary
from practicecomp.sdk.employee import format_currency
from practicecomp.sdk.medical_director import total_medical_director_percentage
from practicecomp.sdk.schemas import EMPLOYEE_TYPES

from .common import echo_json, get_rules, open_scenario, validate_year


def _require_future_year(scenario, year):
    future_year = scenario.get_year(year)
    if future_year is None:
        raise click.ClickException(f"Scenario '{scenario.name}' has no projected year {year}")
    return future_year


@click.command("costs")
@click.argument("scenario_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("year", type=int)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def costs(ctx, scenario_file, year, as_json):
    """Show physician payroll costs for YEAR of SCENARIO_FILE."""
    validate_year(year)
    rules = get_rules(ctx)
    scenario = open_scenario(scenario_file)
    future_year = _require_future_year(scenario, year)
    growth = scenario.projection.benefit_costs_growth_pct
    physicians = future_year.physicians

    md_associates = calculate_md_associates_costs(physicians, year, growth, rules)
    guaranteed = calculate_guaranteed_payments(physicians)
    locums = calculate_locums_salary(future_year.locum_costs)
    non_md = future_year.non_md_employment_costs or compute_default_non_md_employment_costs(year, rules)

    if as_json:
        echo_json({
            "year": year,
            "md_associates": md_associates.to_dict(),
            "guaranteed_payments": guaranteed,
            "locums": locums,
            "non_md_employment": round_dollars(non_md),
        })
        return

    click.echo(f"{scenario.name} - {year}")
    click.echo("=" * 40)
    for physician in physicians:
        if physician.kind not in EMPLOYEE_TYPES or get_employee_portion_of_year(physician) <= 0:
            continue
        delayed = calculate_delayed_w2_payment(physician, year, rules)
        prorated = physician.model_copy(update={"salary": prorated_salary(physician)})
        breakdown = get_employee_cost_breakdown(
            prorated, year, growth, rules,
            delayed_w2_amount=delayed.amount,
            delayed_w2_taxes=delayed.taxes,
            delayed_w2_details=delayed.period_details,
        )
        click.echo(f"\n{physician.name or physician.id} ({physician.kind.value})")
        for line in breakdown.describe().splitlines():
            click.echo(f"  {line}")

    click.echo("\nMD Associates")
    click.echo(f"  Salary:        {format_currency(md_associates.total_salary)}")
    click.echo(f"  Benefits:      {format_currency(md_associates.total_benefits)}")
    click.echo(f"  Payroll taxes: {format_currency(md_associates.total_payroll_taxes)}")
    click.echo(f"Guaranteed payments: {format_currency(guaranteed)}")
    click.echo(f"Locums:              {format_currency(locums)}")
    click.echo(f"Staff employment:    {format_currency(non_md)}")


@click.command("allocate-md")
@click.argument("scenario_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("year", type=int)
def allocate_md(scenario_file, year):
    """Split medical director hours across partners for YEAR."""
    validate_year(year)
    scenario = open_scenario(scenario_file)
    future_year = _require_future_year(scenario, year)

    allocated = calculate_medical_director_hour_percentages(future_year.physicians)
    for physician in allocated:
        click.echo(
            f"{physician.name or physician.id:<20} "
            f"partner {get_partner_portion_of_year(physician):>6.1%}  "
            f"MD hours {physician.medical_director_hours_percentage:>6.2f}%"
        )
    click.echo(f"{'Total':<20} {'':>15}  MD hours {total_medical_director_percentage(allocated):>6.2f}%")


@click.command("income")
@click.argument("year", type=int)
@click.option("--scenario", "scenario_file", type=click.Path(exists=True, dir_okay=False),
              help="Scenario YAML with projected years")
@click.pass_context
def income(ctx, year, scenario_file):
    """Show total income for YEAR (projected year from --scenario, else historic actuals)."""
    validate_year(year)
    rules = get_rules(ctx)
    scenario = open_scenario(scenario_file) if scenario_file else None
    projection = scenario.projection if scenario else None

    year_data = get_year_data(scenario, year, rules)
    if year_data is None:
        raise click.ClickException(f"No projected or historic data for {year}")

    add_ons = get_income_add_ons(year_data, projection, rules)
    source = "historic" if isinstance(year_data, YearRow) else "projected"
    click.echo(f"{year} ({source})")
    click.echo(f"  Therapy income:          {format_currency(year_data.therapy_income)}")
    click.echo(f"  Medical director:        {format_currency(add_ons['medical_director'])}")
    prcs_note = ""
    if source == "projected":
        director = resolve_prcs_director_id(year_data, rules)
        prcs_note = f" (director: {director})" if director else " (no director)"
    click.echo(f"  PRCS medical director:   {format_currency(add_ons['prcs_medical_director'])}{prcs_note}")
    click.echo(f"  Consulting services:     {format_currency(add_ons['consulting_services'])}")
    click.echo(f"  Total:                   {format_currency(get_total_income(year_data, projection, rules))}")


@click.command("compensation")
@click.argument("scenario_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("year", type=int)
@click.option("--include-retired", is_flag=True, help="Include prior-year retirees")
@click.option("--exclude-w2", is_flag=True, help="Show partner W2 in breakdown only")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def compensation(ctx, scenario_file, year, include_retired, exclude_w2, as_json):
    """Distribute the partner pool for YEAR of SCENARIO_FILE."""
    validate_year(year)
    rules = get_rules(ctx)
    scenario = open_scenario(scenario_file)
    future_year = _require_future_year(scenario, year)

    results = calculate_all_compensations(
        future_year,
        benefit_growth_pct=scenario.projection.benefit_costs_growth_pct,
        projection=scenario.projection,
        include_retired=include_retired,
        exclude_w2_from_comp=exclude_w2,
        rules=rules,
    )

    if as_json:
        echo_json([asdict(r) for r in results])
        return

    click.echo(f"{scenario.name} - {year} compensation")
    click.echo("-" * 48)
    for result in results:
        click.echo(f"{result.name or result.id:<20} {result.type:<20} {format_currency(result.comp):>12}")
        delayed_w2 = result.breakdown.delayed_w2
        if delayed_w2:
            click.echo(f"{'':<20} {'incl. prior-year W2':<20} {format_currency(delayed_w2):>12}")
