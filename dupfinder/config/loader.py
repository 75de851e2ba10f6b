"""Configuration loading and validation for dupfinder."""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .models import AppConfig, MatchConfiguration
from .validators import check_for_warnings, emit_warnings

DEFAULT_CONFIG_LOCATIONS = [
    Path("dupfinder.yaml"),
    Path("config") / "dupfinder.yaml",
]

MATCH_CONFIG_SUGGESTIONS = [
    "similarity_threshold must be an integer between 0 and 100",
    "match_types must list at least one of: exact, exact_words, similar, partial",
    "min_word_length must be 1 or greater",
]


def create_match_configuration(**fields: Any) -> MatchConfiguration:
    """
    Build a validated MatchConfiguration.

    Args:
        **fields: MatchConfiguration field values

    Returns:
        Frozen, fully validated MatchConfiguration

    Raises:
        ConfigurationError: If any field is invalid
    """
    try:
        return MatchConfiguration(**fields)
    except ValidationError as e:
        raise ConfigurationError.from_validation_error(
            "Invalid match configuration", e, suggestions=MATCH_CONFIG_SUGGESTIONS
        ) from e


def validate_match_configuration(config: MatchConfiguration) -> MatchConfiguration:
    """
    Re-validate a MatchConfiguration object.

    Catches configurations assembled with ``model_construct`` (or otherwise
    bypassing pydantic) before they reach the scorer. Values are never
    clamped: an out-of-range field is an error.

    Args:
        config: Configuration to check

    Returns:
        The validated configuration

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    if not isinstance(config, MatchConfiguration):
        raise ConfigurationError(
            f"Expected MatchConfiguration, got {type(config).__name__}",
            suggestions=["Build the configuration with create_match_configuration()"],
        )

    try:
        return MatchConfiguration.model_validate(dict(config))
    except ValidationError as e:
        raise ConfigurationError.from_validation_error(
            "Invalid match configuration", e, suggestions=MATCH_CONFIG_SUGGESTIONS
        ) from e


def load_config(config_path: Optional[Path] = None) -> tuple[AppConfig, EnvironmentConfig]:
    """
    Load and validate configuration from YAML file and environment variables.

    Config file lookup order:
    1. config_path argument
    2. DUPFINDER_CONFIG environment variable
    3. dupfinder.yaml in the current directory
    4. ./config/dupfinder.yaml
    5. Built-in defaults when none of the above exist

    Args:
        config_path: Optional path to configuration file

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with validated configuration

    Raises:
        ConfigurationError: If configuration is invalid or an explicit file is missing
    """
    env_config = load_environment_config()

    config_file = _find_config_file(config_path or env_config.config_path)
    if config_file is None:
        return AppConfig(), env_config

    try:
        with open(config_file, "r") as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            suggestions=[
                "Check YAML syntax in your config file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            suggestions=[
                f"Ensure {config_file} is readable",
                "Check file permissions",
            ],
        ) from e

    if not config_dict:
        raise ConfigurationError(
            "Configuration file is empty",
            suggestions=[
                "Copy dupfinder.example.yaml to dupfinder.yaml",
                "Delete the file to run with built-in defaults",
            ],
        )

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            "Configuration file must contain a mapping at the top level",
            suggestions=["Review dupfinder.example.yaml for the expected layout"],
        )

    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    try:
        app_config = AppConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError.from_validation_error(
            "Configuration validation failed",
            e,
            suggestions=[
                "Review dupfinder.example.yaml for correct format",
                "Verify field types match the expected schema",
            ],
        ) from e

    return app_config, env_config


def _find_config_file(config_path: Optional[Path] = None) -> Optional[Path]:
    """
    Find configuration file using fallback logic.

    Args:
        config_path: Optional explicit path to config file

    Returns:
        Path to configuration file, or None if no default file exists

    Raises:
        ConfigurationError: If an explicit path does not exist
    """
    if config_path:
        if not config_path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {config_path}",
                suggestions=[
                    f"Ensure {config_path} exists",
                    "Check the path and try again",
                ],
            )
        return config_path

    for candidate in DEFAULT_CONFIG_LOCATIONS:
        if candidate.exists():
            return candidate

    return None


def validate_config_file(config_path: Path) -> bool:
    """
    Validate a configuration file without loading environment variables.

    Args:
        config_path: Path to configuration file

    Returns:
        True if valid, False otherwise (errors printed to stdout)
    """
    try:
        with open(config_path, "r") as f:
            config_dict = yaml.safe_load(f)

        AppConfig.model_validate(config_dict or {})
        print(f"✓ Configuration file {config_path} is valid")
        return True

    except ValidationError as e:
        error = ConfigurationError.from_validation_error("Configuration validation failed", e)
        print(f"✗ {error}")
        return False
    except (OSError, yaml.YAMLError) as e:
        print(f"✗ Could not read {config_path}: {e}")
        return False
