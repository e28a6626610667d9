"""Rules CLI commands.

Shows the effective engine rules (packaged defaults merged with any
local rules.yaml).
"""

from collections.abc import Mapping

import click
import yaml

from practicecomp.sdk import get_rules_path
from practicecomp.sdk.config import DEFAULT_RULES_PATH, get_rule_value

from .common import get_rules


@click.group()
def rules():
    """Inspect engine rules (tax rates and benefit premiums)."""
    pass


def _to_plain(value):
    """Rules value as plain dicts/lists for YAML output."""
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json")
    if isinstance(value, Mapping):
        return {k: _to_plain(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_to_plain(v) for v in value]
    return value


@rules.command("show")
@click.argument("key", required=False)
@click.pass_context
def rules_show(ctx, key):
    """Show effective rules, or a single dotted KEY.

    \b
    Examples:
      practice-comp rules show
      practice-comp rules show payroll_taxes.medicare_rate
      practice-comp rules show payroll_taxes.social_security_wage_bases.2026
    """
    effective = get_rules(ctx)

    if not key:
        click.echo(yaml.safe_dump(effective.model_dump(mode="json"), sort_keys=False))
        return

    value = get_rule_value(effective, key)
    if value is None:
        raise click.ClickException(f"Unknown rules key: {key}")
    value = _to_plain(value)
    if isinstance(value, (dict, list)):
        click.echo(yaml.safe_dump(value, sort_keys=False))
    else:
        click.echo(value)


@rules.command("path")
def rules_path():
    """Show where rules are loaded from."""
    local = get_rules_path()
    click.echo(f"Packaged defaults: {DEFAULT_RULES_PATH}")
    click.echo(f"Local overrides:   {local} ({'found' if local.exists() else 'not found'})")
