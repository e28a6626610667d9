"""Configuration management for Practice Comp.

Engine rules (tax rates, wage bases, benefit premiums, income actuals,
payroll calendar, known payroll corrections) are data, not code:

1. practicecomp/rules/default.yaml - packaged defaults, always loaded
2. rules.yaml in the config directory - optional local overrides,
   deep-merged over the defaults (e.g. a new jurisdiction's rates)

Config directory resolution:
1. PRACTICE_COMP_CONFIG_PATH environment variable (if set)
2. ~/.config/practice-comp/ (XDG_CONFIG_HOME fallback)

The packaged defaults are parsed once and cached. EngineRules is frozen,
so a cached instance can be shared by concurrent callers.
"""

import logging
import os
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from .schemas import EngineRules

logger = logging.getLogger(__name__)

APP_NAME = "practice-comp"
RULES_FILENAME = "rules.yaml"
DEFAULT_RULES_PATH = Path(__file__).parent.parent / "rules" / "default.yaml"


class RulesNotFoundError(Exception):
    """Raised when an explicitly requested rules file does not exist."""
    pass


class RulesValidationError(Exception):
    """Raised when merged rules do not match the EngineRules schema."""

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.errors = errors or []


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. PRACTICE_COMP_CONFIG_PATH environment variable
    2. ~/.config/practice-comp/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("PRACTICE_COMP_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_rules_path() -> Path:
    """Get the path to the local rules override file (may not exist)."""
    return get_config_dir() / RULES_FILENAME


def load_yaml(path: Path) -> dict:
    """Load a YAML mapping from disk (empty file -> empty dict)."""
    with open(path, "r") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RulesValidationError(f"{path}: expected a mapping at top level")
    return data


def deep_merge(base: dict, override: dict) -> dict:
    """Return a new dict with override merged into base.

    Nested mappings merge key by key; any other value (lists included)
    replaces the base value outright.
    """
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def format_validation_errors(e: ValidationError) -> list[str]:
    """Flatten pydantic errors to 'loc: msg' strings."""
    errors = []
    for err in e.errors():
        loc = ".".join(str(x) for x in err["loc"])
        errors.append(f"{loc}: {err['msg']}")
    return errors


def build_rules(data: dict) -> EngineRules:
    """Validate a rules mapping into EngineRules.

    Raises:
        RulesValidationError: If the mapping does not match the schema
    """
    try:
        return EngineRules.model_validate(data)
    except ValidationError as e:
        errors = format_validation_errors(e)
        raise RulesValidationError(f"Invalid engine rules: {'; '.join(errors)}", errors) from e


@lru_cache(maxsize=1)
def get_default_rules() -> EngineRules:
    """Packaged default rules (parsed once)."""
    return build_rules(load_yaml(DEFAULT_RULES_PATH))


def load_engine_rules(path: Optional[Path] = None) -> EngineRules:
    """Load engine rules with local overrides applied.

    Args:
        path: Explicit override file. If omitted, rules.yaml in the config
              directory is used when present.

    Returns:
        EngineRules (frozen)

    Raises:
        RulesNotFoundError: If an explicit path does not exist
        RulesValidationError: If the merged rules are invalid
    """
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise RulesNotFoundError(f"Rules file not found: {path}")
    else:
        candidate = get_rules_path()
        if not candidate.exists():
            logger.debug("no local rules override, using packaged defaults")
            return get_default_rules()
        path = candidate

    logger.debug(f"applying rules overrides from {path}")
    base = load_yaml(DEFAULT_RULES_PATH)
    return build_rules(deep_merge(base, load_yaml(path)))


def resolve_rules(rules: Optional[EngineRules]) -> EngineRules:
    """Use the given rules, or the packaged defaults."""
    return rules if rules is not None else get_default_rules()


def get_rule_value(rules: EngineRules, key: str, default: Any = None) -> Any:
    """Read a dotted rules key (e.g. 'payroll_taxes.medicare_rate')."""
    value: Any = rules
    for part in key.split("."):
        if isinstance(value, Mapping):
            # Year-keyed tables use int keys
            lookup = int(part) if part.isdigit() else part
            if lookup not in value:
                return default
            value = value[lookup]
        elif hasattr(value, part):
            value = getattr(value, part)
        else:
            return default
    return value
