"""
Environment Variable Utilities.

Provides fail-fast process environment validation for the analysis entry
point. The analysis environment list is handled by config_loader; this
module only covers values set on the serverless function itself.
"""
import os

from .exceptions import ConfigurationError


def require_env(name: str) -> str:
    """
    Get required environment variable or raise a ConfigurationError.

    Args:
        name: The environment variable name

    Returns:
        The stripped environment variable value

    Raises:
        ConfigurationError: If the variable is missing or empty

    Example:
        from geolocation_analysis.core.env_utils import require_env

        ANALYSIS_TOKEN = require_env("T_ANALYSIS_TOKEN")
    """
    value = os.environ.get(name, "").strip()
    if not value:
        raise ConfigurationError(
            f"CRITICAL: Required environment variable '{name}' is missing or empty",
            missing_keys=[name]
        )
    return value
