"""Configuration loader with Pydantic validation and environment variable interpolation."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables at module level
load_dotenv(find_dotenv(usecwd=True))

from tickstats.constants import (
    DEFAULT_ACCEPTED_CONDITION,
    DEFAULT_COLUMN_WIDTH,
    DEFAULT_EMPTY_CONDITION_SENTINEL,
    DEFAULT_SYMBOL_WIDTH,
    DEFAULT_TICK_PRECISION,
    DEFAULT_TRADE_PRECISION,
    LogLevel,
)


def interpolate_env_vars(value: Any) -> Any:
    """
    Interpolate environment variables in string values.

    Supports formats:
    - ${VAR_NAME} - required, empty string if not set
    - ${VAR_NAME:default} - optional with default value
    """
    if not isinstance(value, str):
        return value

    pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)

        env_value = os.environ.get(var_name)

        if env_value is not None:
            return env_value
        elif default is not None:
            return default
        else:
            return ""

    return re.sub(pattern, replacer, value)


def process_config_dict(data: dict[str, Any]) -> dict[str, Any]:
    """Recursively process config dict to interpolate env vars."""
    result = {}
    for key, value in data.items():
        if isinstance(value, dict):
            result[key] = process_config_dict(value)
        elif isinstance(value, list):
            result[key] = [
                process_config_dict(item) if isinstance(item, dict) else interpolate_env_vars(item)
                for item in value
            ]
        else:
            result[key] = interpolate_env_vars(value)
    return result


# ============================================
# Pydantic Configuration Models
# ============================================


class EnvironmentConfig(BaseModel):
    """Environment and runtime settings."""

    log_level: LogLevel = LogLevel.INFO
    data_dir: str = "./data"


class InputConfig(BaseModel):
    """Tick file location and record acceptance rules."""

    path: str = "./data/ticks.csv"
    delimiter: str = ","
    row_limit: int | None = None  # None or 0 reads the whole file
    accepted_condition: str = DEFAULT_ACCEPTED_CONDITION
    empty_condition_sentinel: str = DEFAULT_EMPTY_CONDITION_SENTINEL

    @field_validator("delimiter")
    @classmethod
    def validate_delimiter(cls, v: str) -> str:
        """Validate delimiter is a single character."""
        if len(v) != 1:
            raise ValueError(f"Delimiter must be a single character, got: {v!r}")
        return v

    @field_validator("row_limit")
    @classmethod
    def validate_row_limit(cls, v: int | None) -> int | None:
        if v is not None and v < 0:
            raise ValueError(f"Row limit must be non-negative, got: {v}")
        return v

    @field_validator("accepted_condition")
    @classmethod
    def validate_accepted_condition(cls, v: str) -> str:
        if not v:
            raise ValueError("Accepted condition substring must not be empty")
        return v

    @property
    def effective_row_limit(self) -> int | None:
        """Row limit with 0 treated as unlimited."""
        return self.row_limit or None


class ReportConfig(BaseModel):
    """Fixed-width report layout."""

    output_path: str = "./data/report.txt"
    symbol_width: int = DEFAULT_SYMBOL_WIDTH
    column_width: int = DEFAULT_COLUMN_WIDTH
    trade_precision: int = DEFAULT_TRADE_PRECISION
    tick_precision: int = DEFAULT_TICK_PRECISION
    spread_precision: int | None = None  # None prints floats at default precision

    @field_validator("symbol_width", "column_width")
    @classmethod
    def validate_positive_width(cls, v: int) -> int:
        """Validate column widths are positive."""
        if v <= 0:
            raise ValueError(f"Column width must be positive, got: {v}")
        return v

    @field_validator("trade_precision", "tick_precision", "spread_precision")
    @classmethod
    def validate_precision(cls, v: int | None) -> int | None:
        if v is not None and v < 0:
            raise ValueError(f"Precision must be non-negative, got: {v}")
        return v


class ProcessingConfig(BaseModel):
    """Ingestion settings."""

    workers: int = 1  # >1 partitions the stream by symbol

    @field_validator("workers")
    @classmethod
    def validate_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Workers must be at least 1, got: {v}")
        return v


class AppConfig(BaseModel):
    """Root application configuration."""

    environment: EnvironmentConfig = Field(default_factory=EnvironmentConfig)
    input: InputConfig = Field(default_factory=InputConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)

    @property
    def is_partitioned(self) -> bool:
        """Check if ingestion runs one ledger table per symbol partition."""
        return self.processing.workers > 1


# ============================================
# Configuration Loader
# ============================================


class ConfigLoader:
    """Load and validate configuration from YAML files with env var interpolation."""

    def __init__(self, config_path: str | Path) -> None:
        """
        Initialize config loader.

        Args:
            config_path: Path to the YAML configuration file.
        """
        self.config_path = Path(config_path)
        self._config: AppConfig | None = None

    def load(self) -> AppConfig:
        """
        Load and validate configuration.

        Returns:
            Validated AppConfig instance.

        Raises:
            FileNotFoundError: If config file doesn't exist.
            yaml.YAMLError: If YAML is invalid.
            pydantic.ValidationError: If config validation fails.
        """
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        with open(self.config_path, encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)

        if raw_config is None:
            raw_config = {}

        processed_config = process_config_dict(raw_config)

        self._config = AppConfig.model_validate(processed_config)

        return self._config

    @property
    def config(self) -> AppConfig:
        """Get loaded config, loading if necessary."""
        if self._config is None:
            return self.load()
        return self._config

    def reload(self) -> AppConfig:
        """Force reload configuration from disk."""
        self._config = None
        return self.load()


def load_config(config_path: str | Path) -> AppConfig:
    """
    Convenience function to load configuration.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Validated AppConfig instance.
    """
    loader = ConfigLoader(config_path)
    return loader.load()


def load_config_with_overrides(
    config_path: str | Path,
    *,
    data_path: str | None = None,
    output_path: str | None = None,
    row_limit: int | None = None,
    workers: int | None = None,
    log_level: str | None = None,
) -> AppConfig:
    """
    Load configuration with CLI overrides.

    Args:
        config_path: Path to the YAML configuration file.
        data_path: Override input tick file.
        output_path: Override report destination.
        row_limit: Override number of input lines to read.
        workers: Override number of ingestion partitions.
        log_level: Override log level.

    Returns:
        Validated AppConfig instance with overrides applied.
    """
    config = load_config(config_path)

    updates: dict[str, Any] = {}
    input_updates: dict[str, Any] = {}

    if data_path is not None:
        input_updates["path"] = data_path

    if row_limit is not None:
        input_updates["row_limit"] = row_limit

    if input_updates:
        updates["input"] = InputConfig.model_validate(
            {**config.input.model_dump(), **input_updates}
        )

    if output_path is not None:
        updates["report"] = config.report.model_copy(update={"output_path": output_path})

    if workers is not None:
        updates["processing"] = ProcessingConfig(workers=workers)

    if log_level is not None:
        updates["environment"] = config.environment.model_copy(
            update={"log_level": LogLevel(log_level.upper())}
        )

    if updates:
        return config.model_copy(update=updates)

    return config
