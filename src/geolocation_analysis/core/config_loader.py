"""
Configuration loading utilities.

This module turns the analysis environment, an ordered list of
{"key": ..., "value": ...} pairs, into a Configuration object.

Required Keys (reported in this order when missing):
    1. AWS_REGION
    2. AWS_ACCESSKEYID
    3. AWS_SECRETACCESSKEY

Optional Keys:
    - DESIREABLE_ACCURACY_PERCENT (default "0")
    - GNSS_SOLVER_VARIABLE, IP_ADDRESS_VARIABLE, WIFI_ADDRESSES_VARIABLE

Usage:
    from geolocation_analysis.core.config_loader import load_configuration

    config = load_configuration(context.environment)
"""

import math
from typing import Any, Dict, List, Optional

from .. import constants as CONSTANTS
from .context import Configuration, VariableNames
from .exceptions import ConfigurationError


def get_environment_value(
    environment: List[Dict[str, Any]],
    key: str,
    default: Optional[str] = None
) -> Optional[str]:
    """
    Return the value of the first entry whose key matches exactly.

    Empty values count as absent and yield the default.
    """
    for entry in environment or []:
        if entry.get("key") == key:
            value = entry.get("value")
            if value is None or value == "":
                return default
            return str(value)
    return default


def _parse_threshold(raw_value: str) -> float:
    try:
        threshold = float(raw_value)
    except (TypeError, ValueError):
        threshold = None
    # nan and inf parse as floats but can never be compared meaningfully
    if threshold is None or not math.isfinite(threshold):
        raise ConfigurationError(
            f"{CONSTANTS.ENV_ACCURACY_THRESHOLD} must be a number, got '{raw_value}'"
        )
    return threshold


def load_configuration(environment: List[Dict[str, Any]]) -> Configuration:
    """
    Validate the analysis environment and build a Configuration.

    All missing required keys are collected before failing, so a single
    error lists every one of them.

    Args:
        environment: Ordered list of {"key", "value"} dicts

    Returns:
        Configuration with credentials, region and accuracy threshold

    Raises:
        ConfigurationError: If required keys are missing, or if the accuracy
            threshold is not numeric

    Example:
        >>> load_configuration([{"key": "AWS_REGION", "value": "us-east-1"}])
        ConfigurationError: Missing environment variables: AWS_ACCESSKEYID AWS_SECRETACCESSKEY
    """
    values = {key: get_environment_value(environment, key) for key in CONSTANTS.REQUIRED_ENV_KEYS}
    missing = [key for key in CONSTANTS.REQUIRED_ENV_KEYS if not values[key]]
    if missing:
        raise ConfigurationError(
            f"Missing environment variables: {' '.join(missing)}",
            missing_keys=missing
        )

    raw_threshold = get_environment_value(
        environment,
        CONSTANTS.ENV_ACCURACY_THRESHOLD,
        CONSTANTS.DEFAULT_ACCURACY_THRESHOLD
    )

    return Configuration(
        access_key_id=values[CONSTANTS.ENV_ACCESS_KEY_ID],
        secret_access_key=values[CONSTANTS.ENV_SECRET_ACCESS_KEY],
        region=values[CONSTANTS.ENV_REGION],
        accuracy_threshold=_parse_threshold(raw_threshold),
    )


def load_variable_names(environment: List[Dict[str, Any]]) -> VariableNames:
    """Resolve the scope variable names, falling back to the defaults."""
    return VariableNames(
        gnss_solver=get_environment_value(
            environment, CONSTANTS.ENV_GNSS_SOLVER_VARIABLE, CONSTANTS.DEFAULT_GNSS_SOLVER_VARIABLE
        ),
        ip_address=get_environment_value(
            environment, CONSTANTS.ENV_IP_ADDRESS_VARIABLE, CONSTANTS.DEFAULT_IP_ADDRESS_VARIABLE
        ),
        wifi_addresses=get_environment_value(
            environment, CONSTANTS.ENV_WIFI_ADDRESSES_VARIABLE, CONSTANTS.DEFAULT_WIFI_ADDRESSES_VARIABLE
        ),
    )
