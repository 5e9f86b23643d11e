# Directory: config.py
"""
Configuration management for the application.
"""
import codecs
import json
import os
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional

from exceptions import ConfigError

# Tried in this order; the first format that round-trips wins.
SUPPORTED_DATE_FORMATS = [
    "%Y-%m-%d",  # 2023-11-01
    "%m/%d/%Y",  # 11/01/2023
    "%d/%m/%Y",  # 01/11/2023
    "%d-%b-%y",  # 01-Nov-23
    "%Y/%m/%d",  # 2023/11/01
    "%m-%d-%Y",  # 11-01-2023
    "%m-%d-%y",  # 11-01-23
    "%d-%m-%Y",  # 01-11-2023
]

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@dataclass
class DateConfig:
    """Configuration for date normalization."""

    formats: List[str] = field(default_factory=lambda: list(SUPPORTED_DATE_FORMATS))
    # Two-digit years below the pivot land in 20xx, the rest in 19xx.
    two_digit_year_pivot: int = 70
    null_token: str = "NULL"


@dataclass
class LoaderConfig:
    """Configuration for reading assignment files."""

    employee_column: str = "EmpID"
    project_column: str = "ProjectID"
    date_from_column: str = "DateFrom"
    date_to_column: str = "DateTo"
    delimiter: str = ","
    encoding: str = "utf-8-sig"

    @property
    def required_columns(self) -> List[str]:
        return [
            self.employee_column,
            self.project_column,
            self.date_from_column,
            self.date_to_column,
        ]


@dataclass
class AppConfig:
    """Main application configuration."""

    date: DateConfig = field(default_factory=DateConfig)
    loader: LoaderConfig = field(default_factory=LoaderConfig)
    log_level: str = "INFO"

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raise ConfigError if any setting is unusable."""
        if not self.date.formats:
            raise ConfigError("At least one date format must be configured.")
        if not 0 <= self.date.two_digit_year_pivot <= 100:
            raise ConfigError(
                f"Two-digit year pivot must be between 0 and 100, "
                f"got {self.date.two_digit_year_pivot}"
            )
        if len(self.loader.delimiter) != 1:
            raise ConfigError(
                f"CSV delimiter must be a single character, got {self.loader.delimiter!r}"
            )
        try:
            codecs.lookup(self.loader.encoding)
        except LookupError as e:
            raise ConfigError(f"Unknown CSV encoding: {self.loader.encoding}") from e
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(f"Unknown log level: {self.log_level}")

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "AppConfig":
        """Create a configuration from a flat dictionary."""
        date_config = DateConfig(
            formats=list(config_dict.get("DATE_FORMATS", SUPPORTED_DATE_FORMATS)),
            two_digit_year_pivot=config_dict.get("TWO_DIGIT_YEAR_PIVOT", 70),
            null_token=config_dict.get("NULL_TOKEN", "NULL"),
        )

        loader_config = LoaderConfig(
            **{
                k.split("_", 1)[1].lower(): v
                for k, v in config_dict.items()
                if k.startswith("CSV_")
            }
        ) if any(k.startswith("CSV_") for k in config_dict) else LoaderConfig()

        column_names = config_dict.get("COLUMNS", {})
        for attr, key in (
            ("employee_column", "EMPLOYEE"),
            ("project_column", "PROJECT"),
            ("date_from_column", "DATE_FROM"),
            ("date_to_column", "DATE_TO"),
        ):
            if key in column_names:
                setattr(loader_config, attr, column_names[key])

        return cls(
            date=date_config,
            loader=loader_config,
            log_level=config_dict.get("LOG_LEVEL", "INFO"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a flat dictionary."""
        result = {
            "DATE_FORMATS": list(self.date.formats),
            "TWO_DIGIT_YEAR_PIVOT": self.date.two_digit_year_pivot,
            "NULL_TOKEN": self.date.null_token,
            "LOG_LEVEL": self.log_level,
            "COLUMNS": {
                "EMPLOYEE": self.loader.employee_column,
                "PROJECT": self.loader.project_column,
                "DATE_FROM": self.loader.date_from_column,
                "DATE_TO": self.loader.date_to_column,
            },
        }

        for key in ("delimiter", "encoding"):
            result[f"CSV_{key.upper()}"] = getattr(self.loader, key)

        return result


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load configuration from a JSON file or use defaults.

    Args:
        config_path: Path to configuration file

    Returns:
        AppConfig: Application configuration
    """
    if not config_path:
        return AppConfig()
    if not os.path.exists(config_path):
        raise ConfigError(f"Config file not found: {config_path}")
    try:
        with open(config_path, "r") as f:
            config_dict = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Error loading config from {config_path}: {e}") from e
    if not isinstance(config_dict, dict):
        raise ConfigError(f"Config file {config_path} must contain a JSON object")
    try:
        return AppConfig.from_dict(config_dict)
    except TypeError as e:
        raise ConfigError(f"Invalid config in {config_path}: {e}") from e
