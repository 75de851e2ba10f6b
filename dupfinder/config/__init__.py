"""Configuration management module for dupfinder."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import CandidateLoadError, ConfigurationError
from .loader import (
    create_match_configuration,
    load_config,
    validate_config_file,
    validate_match_configuration,
)
from .models import (
    AppConfig,
    LogFormat,
    LogLevel,
    LoggingConfig,
    MatchConfiguration,
    MatchType,
    SearchConfig,
    SearchScope,
)

__all__ = [
    # Loader functions
    "load_config",
    "validate_config_file",
    "load_environment_config",
    "create_match_configuration",
    "validate_match_configuration",
    # Configuration models
    "AppConfig",
    "MatchConfiguration",
    "LoggingConfig",
    "SearchConfig",
    "EnvironmentConfig",
    # Enums
    "MatchType",
    "SearchScope",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
    "CandidateLoadError",
]
