"""
Position estimation steps: request building, the AWS call and response mapping.
"""

from .payload import build_position_request
from .result_mapper import build_device_update, extract_estimated_location
from .aws_client import create_iot_wireless_client, estimate_position

__all__ = [
    "build_position_request",
    "build_device_update",
    "extract_estimated_location",
    "create_iot_wireless_client",
    "estimate_position",
]
