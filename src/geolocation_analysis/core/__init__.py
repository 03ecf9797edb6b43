"""
Core building blocks of the geolocation analysis.

Modules:
    context: Dataclasses passed between the analysis steps
    config_loader: Analysis environment validation
    env_utils: Process environment lookup for the entry point
    exceptions: Custom exception types for the analysis
"""

from .context import (
    AnalysisOutcome,
    Configuration,
    DeviceUpdate,
    EstimatedLocation,
    PositionRequest,
    ScopeRecord,
    VariableNames,
    WifiAccessPoint,
)
from .config_loader import load_configuration, load_variable_names
from .exceptions import (
    AnalysisError,
    ConfigurationError,
    PayloadError,
    ResponseError,
    TransportError,
)

__all__ = [
    # Context
    "AnalysisOutcome",
    "Configuration",
    "DeviceUpdate",
    "EstimatedLocation",
    "PositionRequest",
    "ScopeRecord",
    "VariableNames",
    "WifiAccessPoint",
    # Config
    "load_configuration",
    "load_variable_names",
    # Exceptions
    "AnalysisError",
    "ConfigurationError",
    "PayloadError",
    "ResponseError",
    "TransportError",
]
