"""Practice Comp CLI - physician compensation and practice projections."""

import logging
import os

import click

from practicecomp import __version__
from practicecomp.sdk import (
    calculate_employer_payroll_tax_breakdown,
    get_benefit_costs_for_year,
    get_social_security_wage_base,
)
from practicecomp.sdk.employee import format_currency

from .common import echo_json, get_rules, validate_year
from .roster_commands import allocate_md, compensation, costs, income
from .rules_commands import rules as rules_group


def configure_logging() -> None:
    """Configure the root logger from the LOG_LEVEL environment variable."""
    log_level = os.environ.get("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@click.group()
@click.version_option(version=__version__, prog_name="practice-comp")
@click.option("--rules", "rules_path", type=click.Path(dir_okay=False),
              help="Rules override YAML (default: rules.yaml in the config directory)")
@click.pass_context
def cli(ctx, rules_path):
    """Practice Comp - physician compensation and practice projections.

    Engine rules are loaded from (in order):

    \b
    1. --rules FILE (merged over packaged defaults)
    2. PRACTICE_COMP_CONFIG_PATH/rules.yaml
    3. ~/.config/practice-comp/rules.yaml (XDG default)
    4. Packaged defaults

    Set LOG_LEVEL=DEBUG to trace calculations.
    """
    ctx.ensure_object(dict)
    ctx.obj["rules_path"] = rules_path


cli.add_command(rules_group)
cli.add_command(costs)
cli.add_command(allocate_md)
cli.add_command(income)
cli.add_command(compensation)


TAX_LABELS = [
    ("federal_unemployment", "Federal unemployment (FUTA)"),
    ("social_security", "Social Security"),
    ("medicare", "Medicare"),
    ("state_unemployment", "State unemployment"),
    ("state_family_leave", "State family leave"),
    ("state_disability", "State disability"),
    ("state_minor", "State minor rate"),
]


@cli.command("taxes")
@click.argument("wages", type=float)
@click.option("--year", "-y", type=int, default=2025, show_default=True, help="Tax year")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def taxes(ctx, wages, year, as_json):
    """Show employer payroll taxes on annual WAGES."""
    validate_year(year)
    if wages < 0:
        raise click.BadParameter("WAGES must be non-negative")

    rules = get_rules(ctx)
    breakdown = calculate_employer_payroll_tax_breakdown(wages, year, rules)

    if as_json:
        echo_json({"wages": wages, "year": year, **breakdown.to_dict()})
        return

    click.echo(f"Employer payroll taxes on {format_currency(wages)} ({year})")
    click.echo(f"SS wage base: {format_currency(get_social_security_wage_base(year, rules))}")
    click.echo("-" * 48)
    components = breakdown.to_dict()
    for key, label in TAX_LABELS:
        click.echo(f"  {label:<30} {components[key]:>12,.2f}")
    click.echo("-" * 48)
    click.echo(f"  {'Total':<30} {breakdown.total:>12,.2f}")


@cli.command("benefits")
@click.argument("year", type=int)
@click.option("--growth", "-g", type=float, default=5.0, show_default=True,
              help="Annual benefit cost growth (percent)")
@click.pass_context
def benefits(ctx, year, growth):
    """Show the full-year benefit cost per employee for YEAR."""
    validate_year(year)
    rules = get_rules(ctx)
    cost = get_benefit_costs_for_year(year, growth, rules)
    click.echo(f"{year} benefits (growth {growth}%/yr from {rules.benefits.base_year}): {cost:,.2f}")


def main():
    """Entry point for the CLI."""
    configure_logging()
    cli()


if __name__ == "__main__":
    main()
