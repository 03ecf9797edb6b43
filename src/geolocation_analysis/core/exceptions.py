"""
Custom exceptions for the geolocation analysis.

This module defines a hierarchy of exceptions used throughout the analysis
to provide clear, actionable error messages.

Exception Hierarchy:
    AnalysisError (base)
    ├── ConfigurationError - Missing or invalid environment settings
    ├── PayloadError - Insufficient or malformed telemetry
    ├── ResponseError - Missing or unparsable geolocation response
    └── TransportError - Failed call to AWS or to the device platform
"""

from typing import Optional


class AnalysisError(Exception):
    """
    Base exception for all analysis-related errors.

    The top-level handler catches this class, logs it and ends the
    invocation without writing to the device.

    Attributes:
        message: Human-readable error description
        device: Optional device ID the invocation was working on
    """

    def __init__(self, message: str, device: Optional[str] = None):
        self.message = message
        self.device = device

        if device:
            full_message = f"{message} [device={device}]"
        else:
            full_message = message

        super().__init__(full_message)


class ConfigurationError(AnalysisError):
    """
    Raised when the analysis environment is incomplete or invalid.

    Example:
        >>> load_configuration([])
        ConfigurationError: Missing environment variables: AWS_REGION AWS_ACCESSKEYID AWS_SECRETACCESSKEY
    """

    def __init__(self, message: str, missing_keys: Optional[list[str]] = None):
        self.missing_keys = missing_keys or []
        super().__init__(message)


class PayloadError(AnalysisError):
    """
    Raised when the telemetry scope cannot be turned into a position request.

    This typically occurs when:
    - None of GNSS, IP or WiFi data is present
    - Fewer than 2 WiFi access points were reported
    """


class ResponseError(AnalysisError):
    """
    Raised when the geolocation response is missing or has no usable location.
    """


class TransportError(AnalysisError):
    """
    Raised when an external call (AWS or the device platform) fails.

    Attributes:
        service: Name of the remote service (e.g., "iotwireless", "tagoio")
        original_error: The underlying SDK or HTTP exception
    """

    def __init__(
        self,
        service: str,
        original_error: Optional[Exception] = None,
        device: Optional[str] = None
    ):
        self.service = service
        self.original_error = original_error

        message = f"Request to {service} failed"
        if original_error:
            message += f": {str(original_error)}"

        super().__init__(message, device=device)
