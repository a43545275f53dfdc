"""
Configuration management for report helpers.
"""

import logging
import os
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import yaml

from .text import MILLIS_MODES

logger = logging.getLogger(__name__)

# Module-level lock for thread-safe config loading
_config_lock = threading.Lock()

REPORT_FORMATS = ["console", "json"]

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigurationError(Exception):
    """Raised when configuration is invalid or cannot be loaded."""

    pass


@dataclass
class ReportConfig:
    """Display settings applied to derived report values.

    Example config YAML::

        millis_mode: legacy
        percentage_decimals: 1
        strip_thread_ids: false
        report_format: json
    """

    # "remainder" prints true milliseconds; "legacy" keeps the old bitwise value
    millis_mode: str = "remainder"
    percentage_decimals: int = 2
    strip_thread_ids: bool = True
    report_format: str = "console"  # console, json


def _parse_env_int(var_name: str) -> Optional[int]:
    """
    Safely parse an integer from an environment variable.

    Args:
        var_name: Name of the environment variable

    Returns:
        Parsed integer value, or None if the variable is not set

    Raises:
        ConfigurationError: If the value cannot be parsed as an integer
    """
    value = os.environ.get(var_name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(
            f"Environment variable {var_name} must be a valid integer, got: '{value}'"
        )


def _parse_env_bool(var_name: str) -> Optional[bool]:
    value = os.environ.get(var_name)
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"Environment variable {var_name} must be a boolean (true/false), got: '{value}'"
    )


def load_config(config_file: Optional[str] = None) -> ReportConfig:
    """
    Load configuration from file and environment variables.

    Configuration precedence (highest to lowest):
    1. Environment variables
    2. Configuration file
    3. Default values

    Args:
        config_file: Path to YAML configuration file (optional)

    Returns:
        ReportConfig object with merged configuration

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist
        ConfigurationError: If config file has invalid YAML or env vars are invalid
    """
    with _config_lock:
        config_data: Dict[str, Any] = {}

        if config_file:
            logger.info("Loading configuration from %s", config_file)
            try:
                with open(config_file, "r") as f:
                    file_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in config file '{config_file}': {e}")
            except FileNotFoundError:
                raise FileNotFoundError(f"Configuration file not found: {config_file}")
            except PermissionError:
                raise ConfigurationError(f"Permission denied reading config file '{config_file}'")
            except OSError as e:
                raise ConfigurationError(f"Unable to read config file '{config_file}': {e}")
            if not isinstance(file_config, dict):
                raise ConfigurationError(
                    f"Config file '{config_file}' must contain a mapping, "
                    f"got {type(file_config).__name__}"
                )
            config_data.update(file_config)

        env_overrides = _load_from_env()
        config_data.update(env_overrides)
        if env_overrides:
            logger.debug("Applied environment variable overrides: %s", list(env_overrides.keys()))

        try:
            return ReportConfig(**config_data)
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration: {e}")


def _load_from_env() -> Dict[str, Any]:
    """
    Load configuration from environment variables.

    Supported environment variables:
    - TESTRUN_REPORT_MILLIS_MODE: remainder or legacy
    - TESTRUN_REPORT_PERCENT_DECIMALS: Decimal places for percentages
    - TESTRUN_REPORT_STRIP_THREAD_IDS: Show thread names without numeric ids
    - TESTRUN_REPORT_FORMAT: Report format (console, json)

    Returns:
        Dictionary of configuration values from environment

    Raises:
        ConfigurationError: If environment variable values are invalid
    """
    env_config: Dict[str, Any] = {}

    if "TESTRUN_REPORT_MILLIS_MODE" in os.environ:
        env_config["millis_mode"] = os.environ["TESTRUN_REPORT_MILLIS_MODE"]

    decimals = _parse_env_int("TESTRUN_REPORT_PERCENT_DECIMALS")
    if decimals is not None:
        env_config["percentage_decimals"] = decimals

    strip = _parse_env_bool("TESTRUN_REPORT_STRIP_THREAD_IDS")
    if strip is not None:
        env_config["strip_thread_ids"] = strip

    if "TESTRUN_REPORT_FORMAT" in os.environ:
        env_config["report_format"] = os.environ["TESTRUN_REPORT_FORMAT"]

    return env_config


def validate_config(config: ReportConfig) -> List[str]:
    """
    Validate configuration and return list of errors.

    Args:
        config: ReportConfig to validate

    Returns:
        List of error messages (empty if valid)
    """
    errors: List[str] = []

    if config.millis_mode not in MILLIS_MODES:
        errors.append(f"millis_mode must be one of {list(MILLIS_MODES)}: {config.millis_mode}")

    if not isinstance(config.percentage_decimals, int) or isinstance(
        config.percentage_decimals, bool
    ):
        errors.append(f"percentage_decimals must be an integer: {config.percentage_decimals!r}")
    elif not 0 <= config.percentage_decimals <= 6:
        errors.append(f"percentage_decimals must be between 0 and 6: {config.percentage_decimals}")

    if not isinstance(config.strip_thread_ids, bool):
        errors.append(f"strip_thread_ids must be a boolean: {config.strip_thread_ids!r}")

    if config.report_format not in REPORT_FORMATS:
        errors.append(f"report_format must be one of {REPORT_FORMATS}: {config.report_format}")

    return errors
