"""Shared CLI helpers: rules and scenario loading with click-friendly errors."""

import json
from pathlib import Path
from typing import Optional

import click

from practicecomp.sdk import (
    EngineRules,
    RulesNotFoundError,
    RulesValidationError,
    ScenarioError,
    load_engine_rules,
    load_scenario,
)
from practicecomp.sdk.schemas import Scenario


def get_rules(ctx: click.Context) -> EngineRules:
    """Engine rules for this invocation (loaded once per command)."""
    obj = ctx.ensure_object(dict)
    if "rules" not in obj:
        try:
            obj["rules"] = load_engine_rules(obj.get("rules_path"))
        except (RulesNotFoundError, RulesValidationError) as e:
            raise click.ClickException(str(e))
    return obj["rules"]


def open_scenario(path: str) -> Scenario:
    try:
        return load_scenario(Path(path))
    except ScenarioError as e:
        raise click.ClickException(str(e))


def echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def validate_year(year: Optional[int]) -> None:
    if year is not None and not (1900 <= year <= 2999):
        raise click.BadParameter(f"Invalid year '{year}'. Must be 4 digits.")
