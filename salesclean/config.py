"""
Cleaning configuration.

Defaults reproduce the standard cleaning of the sales extract. A YAML file
can override them, e.g. to register new payment-method aliases:

```yaml
cleaning:
  total_tolerance: 0.05
  default_label: Unknown
  returned_status: Returned
  null_literals: ["NULL"]
  min_valid_date: 2000-01-01
  payment_aliases:
    visa: Credit Card
    wire: Bank Transfer
```
"""

from datetime import date
from decimal import Decimal
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator


class ConfigError(ValueError):
    """Raised when a configuration file cannot be used."""
    pass


class CleaningConfig(BaseModel):
    """
    Tunable constants of the cleaning run.

    Attributes:
        total_tolerance: Allowed |total_amount - price * quantity| before repair
        default_label: Fill value for missing category, payment method and status
        returned_status: Status assigned to negative-quantity rows with no status
        null_literals: Status texts treated as missing
        payment_aliases: Extra alias -> canonical payment method entries
        min_valid_date: Earliest plausible purchase date for the report
    """

    total_tolerance: Decimal = Field(Decimal("0.05"), ge=0)
    default_label: str = Field("Unknown", min_length=1)
    returned_status: str = Field("Returned", min_length=1)
    null_literals: list[str] = Field(default_factory=lambda: ["NULL"])
    payment_aliases: dict[str, str] = Field(default_factory=dict)
    min_valid_date: date = date(2000, 1, 1)

    class Config:
        frozen = True

    @field_validator("payment_aliases")
    @classmethod
    def check_aliases_not_blank(cls, v):
        """Aliases and their targets must be non-blank."""
        for alias, canonical in v.items():
            if not str(alias).strip() or not str(canonical).strip():
                raise ValueError(f"blank payment alias entry: {alias!r} -> {canonical!r}")
        return v


class CleaningConfigLoader:
    """
    Loads CleaningConfig from a YAML file with a top-level 'cleaning' section.
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Cleaning configuration file not found: {config_path}")

    def load(self) -> CleaningConfig:
        """
        Parse the YAML file into a CleaningConfig.

        Raises:
            ConfigError: If YAML is invalid or values fail validation
        """
        try:
            with open(self.config_path) as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not isinstance(config, dict) or "cleaning" not in config:
            raise ConfigError("Configuration file must contain 'cleaning' section")

        section = config["cleaning"] or {}
        if not isinstance(section, dict):
            raise ConfigError("'cleaning' section must be a mapping")

        # YAML reads 0.05 as float; go through str to keep it exact
        if isinstance(section.get("total_tolerance"), float):
            section["total_tolerance"] = str(section["total_tolerance"])

        try:
            return CleaningConfig(**section)
        except ValidationError as e:
            raise ConfigError(f"Invalid cleaning configuration: {e}") from e


def load_config(config_path: str | Path | None = None) -> CleaningConfig:
    """Load configuration from a file, or return defaults when no path is given."""
    if config_path is None:
        return CleaningConfig()
    return CleaningConfigLoader(config_path).load()
