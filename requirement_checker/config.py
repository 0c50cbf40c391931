"""Configuration system for the requirement checker."""

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "requirement-checker.yaml"


class RuntimeConfig(BaseModel):
    """PHP runtime probe settings."""
    php_binary: str = "php"
    timeout: int = 30

    model_config = ConfigDict(from_attributes=True)

    @field_validator('timeout')
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v


class ReportConfig(BaseModel):
    """Report rendering settings. ``None`` means detect from the terminal."""
    app_name: Optional[str] = None
    width: Optional[int] = None
    color: Optional[bool] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator('width')
    @classmethod
    def validate_width(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 10:
            raise ValueError("width must be at least 10")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = "WARNING"
    file_path: Optional[str] = None
    console_enabled: bool = False

    model_config = ConfigDict(from_attributes=True)

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        allowed = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"Log level must be one of {allowed}")
        return v_upper


class CheckerConfig(BaseModel):
    """Main requirement checker configuration."""
    lock_file: str = "composer.lock"
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(from_attributes=True)


class ConfigLoader:
    """Load and validate configuration from YAML files."""

    @staticmethod
    def load_config(
        config_path: Optional[str] = None,
        local_override_path: Optional[str] = None
    ) -> CheckerConfig:
        """Load configuration with optional local overrides.

        A missing file at the default location yields the default
        configuration; an explicitly given path must exist.

        Args:
            config_path: Path to main config file, the default location when None
            local_override_path: Optional path to local override file

        Returns:
            Validated CheckerConfig

        Raises:
            ConfigError: If config loading or validation fails
        """
        if config_path is None:
            if not Path(DEFAULT_CONFIG_PATH).exists():
                logger.debug(f"No {DEFAULT_CONFIG_PATH} found, using defaults")
                return get_default_config()
            config_path = DEFAULT_CONFIG_PATH

        config_dict = ConfigLoader._load_yaml(config_path)

        if local_override_path and Path(local_override_path).exists():
            logger.info(f"Loading local config overrides from {local_override_path}")
            override_dict = ConfigLoader._load_yaml(local_override_path)
            config_dict = ConfigLoader.merge_configs(config_dict, override_dict)

        try:
            config = CheckerConfig(**config_dict)
        except (ValidationError, TypeError) as e:
            logger.error(f"Failed to load configuration: {e}")
            raise ConfigError(f"Failed to load configuration: {e}")

        logger.info("Configuration loaded successfully")
        return config

    @staticmethod
    def _load_yaml(path: str) -> dict:
        """Load YAML file."""
        try:
            with open(path, 'r') as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise ConfigError(f"Config file not found: {path}")
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping in {path}, got {type(data).__name__}")
        return data

    @staticmethod
    def merge_configs(base: dict, override: dict) -> dict:
        """Deep merge two configuration dictionaries.

        Args:
            base: Base configuration
            override: Override configuration

        Returns:
            Merged configuration
        """
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = ConfigLoader.merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    @staticmethod
    def save_config(config: CheckerConfig, output_path: str):
        """Save configuration to YAML file.

        Args:
            config: Configuration to save
            output_path: Output file path
        """
        try:
            config_dict = config.model_dump()

            Path(output_path).parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w') as f:
                yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)

            logger.info(f"Configuration saved to {output_path}")
        except OSError as e:
            logger.error(f"Failed to save configuration: {e}")
            raise ConfigError(f"Failed to save configuration: {e}")


def get_default_config() -> CheckerConfig:
    """Get default configuration.

    Returns:
        Default CheckerConfig
    """
    return CheckerConfig()
