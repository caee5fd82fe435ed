import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from cerberus import Validator
from pydantic import ValidationError

from comp_rollup.config.models import BudgetSettings
from comp_rollup.exceptions import ConfigLoadError

# Configure logger for this module
logger = logging.getLogger(__name__)

_NUMBER_RULE = {"type": "number", "min": 0, "required": False, "nullable": False}

# Both the snake_case and the stored camelCase spellings are accepted
BUDGET_SCHEMA: Dict[str, Any] = {
    "base_salary_increase_allowance": _NUMBER_RULE,
    "stock_increase_allowance": _NUMBER_RULE,
    "standard_merit_percentage": _NUMBER_RULE,
    "max_over_budget": _NUMBER_RULE,
    "baseSalaryIncreaseAllowance": _NUMBER_RULE,
    "stockIncreaseAllowance": _NUMBER_RULE,
    "standardMeritPercentage": _NUMBER_RULE,
    "maxOverBudget": _NUMBER_RULE,
}

# Top-level key a config file may nest the settings under
BUDGET_SECTION = "budget"


def load_yaml_config(config_path: Union[Path, str]) -> Dict[str, Any]:
    """
    Read a budget YAML file into a mapping.

    An empty file gives an empty mapping. Anything other than a mapping at the
    top level, a missing file or unparsable YAML raises ConfigLoadError.
    """
    config_path = Path(config_path)
    logger.info(f"Reading budget config {config_path}")

    if not config_path.is_file():
        logger.error(f"Budget config not found: {config_path}")
        raise ConfigLoadError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except (yaml.YAMLError, OSError) as e:
        logger.error(f"Could not read budget config {config_path}: {e}")
        raise ConfigLoadError(f"Could not read budget config {config_path}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        logger.error(f"Budget config {config_path} is a {type(raw).__name__}, not a mapping")
        raise ConfigLoadError(f"Budget config {config_path} must be a mapping")
    return raw


def budget_settings_from_dict(config_data: Dict[str, Any]) -> BudgetSettings:
    """
    Validate a raw mapping and build BudgetSettings from it.
    - Settings may sit at the top level or under a 'budget' key.
    - Unknown keys are ignored; known keys must be non-negative numbers.
    - Raises ConfigLoadError on validation errors.
    """
    section = config_data.get(BUDGET_SECTION, config_data)
    if section is None:
        section = {}
    if not isinstance(section, dict):
        raise ConfigLoadError(f"'{BUDGET_SECTION}' section must be a mapping")

    v = Validator(BUDGET_SCHEMA, allow_unknown=True)
    if not v.validate(section):
        raise ConfigLoadError(f"Budget config validation failed: {v.errors}")

    try:
        settings = BudgetSettings.model_validate(section)
    except ValidationError as e:
        raise ConfigLoadError(f"Invalid budget settings: {e}") from e

    logger.debug(f"Budget settings loaded: {settings}")
    return settings


def load_budget_settings(config_path: Union[Path, str]) -> BudgetSettings:
    """Load BudgetSettings from a YAML file."""
    config_data = load_yaml_config(config_path)
    return budget_settings_from_dict(config_data)


# Expose for import
__all__ = [
    "BUDGET_SCHEMA",
    "load_yaml_config",
    "budget_settings_from_dict",
    "load_budget_settings",
    "ConfigLoadError",
]
