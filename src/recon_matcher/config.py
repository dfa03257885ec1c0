"""Configuration loader and validation for reconciliation settings."""

from decimal import Decimal
from pathlib import Path
from typing import Any, Mapping, Optional, Union
import logging

import yaml
from pydantic import BaseModel, Field, ValidationError

from .utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class ReconciliationSettings(BaseModel):
    """Options controlling the two matching phases and the confidence model."""

    fuzzy_matching: bool = True
    fuzzy_threshold: float = Field(default=0.7, ge=0.0, le=1.0)
    match_by_amount: bool = True
    match_by_description: bool = True
    match_by_reference: bool = True
    match_by_date: bool = True
    date_tolerance: float = Field(default=3, ge=0)
    auto_match_exact: bool = True


# Keys as they appear in camelCase payloads
_CAMEL_CASE_KEYS = {
    "fuzzyMatching": "fuzzy_matching",
    "fuzzyThreshold": "fuzzy_threshold",
    "matchByAmount": "match_by_amount",
    "matchByDescription": "match_by_description",
    "matchByReference": "match_by_reference",
    "matchByDate": "match_by_date",
    "dateTolerance": "date_tolerance",
    "autoMatchExact": "auto_match_exact",
}


def resolve_settings(
    overrides: Optional[Union[ReconciliationSettings, Mapping[str, Any]]] = None,
) -> ReconciliationSettings:
    """
    Shallow-merge caller settings over the defaults.

    Args:
        overrides: ``None``, a mapping of setting names (snake_case or
            camelCase), or a ``ReconciliationSettings`` whose explicitly set
            fields take precedence

    Returns:
        A fully populated ``ReconciliationSettings``

    Raises:
        ConfigurationError: If a value is out of range or of the wrong type
    """
    if overrides is None:
        return ReconciliationSettings()

    if isinstance(overrides, ReconciliationSettings):
        explicit = {name: getattr(overrides, name) for name in overrides.model_fields_set}
    else:
        explicit = {}
        for key, value in overrides.items():
            name = _CAMEL_CASE_KEYS.get(key, key)
            if name not in ReconciliationSettings.model_fields:
                logger.warning(f"Ignoring unknown reconciliation setting: {key}")
                continue
            # Absent and explicitly-undefined values both fall back to defaults
            if value is None:
                continue
            explicit[name] = value

    merged = ReconciliationSettings().model_dump()
    merged.update(explicit)

    try:
        return ReconciliationSettings(**merged)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid reconciliation settings: {e}") from e


class InputConfig(BaseModel):
    """Configuration for transaction CSV parsing."""

    csv: dict[str, Any] = Field(
        default_factory=lambda: {
            "encoding": "utf-8",
            "delimiter": ",",
            "date_format": "%Y-%m-%d",
            "column_mappings": {
                "id": "id",
                "date": "date",
                "description": "description",
                "amount": "amount",
                "debit": "debit",
                "credit": "credit",
                "type": "type",
                "category": "category",
                "reference": "reference",
            },
        }
    )


class AccountConfig(BaseModel):
    """Account being reconciled."""

    name: str = ""
    number: str = ""
    bank: Optional[str] = None
    currency: str = "USD"
    opening_balance: Decimal = Decimal("0")
    closing_balance: Decimal = Decimal("0")


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None
    max_bytes: int = Field(10 * 1024 * 1024, gt=0)
    backup_count: int = Field(5, ge=0)


class ReconConfig(BaseModel):
    """Main configuration model for reconciliation."""

    input: InputConfig = Field(default_factory=InputConfig)
    account: AccountConfig = Field(default_factory=AccountConfig)
    reconciliation: ReconciliationSettings = Field(default_factory=ReconciliationSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    config_file_path: Optional[str] = None


def get_default_config() -> dict[str, Any]:
    """Return the default configuration as a dictionary."""
    return {
        "input": InputConfig().model_dump(),
        "account": {
            "name": "",
            "number": "",
            "bank": None,
            "currency": "USD",
            "opening_balance": "0.00",
            "closing_balance": "0.00",
        },
        "reconciliation": ReconciliationSettings().model_dump(),
        "logging": LoggingConfig().model_dump(),
    }


def load_config(config_path: Optional[Path] = None) -> ReconConfig:
    """
    Load configuration from a YAML file or use defaults.

    Args:
        config_path: Path to YAML configuration file (optional)

    Returns:
        ReconConfig object with loaded or default settings

    Raises:
        ConfigurationError: If the file cannot be parsed or holds invalid values
    """
    config_dict = get_default_config()

    if config_path and config_path.exists():
        logger.info(f"Loading configuration from: {config_path}")
        try:
            with open(config_path, "r") as f:
                user_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(user_config, dict):
            raise ConfigurationError(f"Configuration root must be a mapping: {config_path}")

        config_dict = _deep_merge(config_dict, user_config)
        config_dict["config_file_path"] = str(config_path)
    else:
        logger.info("Using default configuration")

    try:
        return ReconConfig(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def _deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary to merge on top

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def generate_default_config(output_path: Path) -> None:
    """
    Write a default configuration file.

    Args:
        output_path: Path to write the configuration file
    """
    config_dict = get_default_config()

    yaml_content = """# Bank/book reconciliation configuration
# Generated configuration file - customize as needed
#
# reconciliation.fuzzy_threshold: minimum confidence (0-1) for a fuzzy match
# reconciliation.date_tolerance: days after which the date factor scores 0

"""
    yaml_content += yaml.dump(config_dict, default_flow_style=False, sort_keys=False)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        f.write(yaml_content)

    logger.info(f"Generated configuration file: {output_path}")
