"""
AWS IoT Wireless client for position estimates.

Design Decision:
    The client is created from an injected Configuration rather than from
    module-level environment reads, so tests can pass a MagicMock client
    straight into estimate_position.

Usage:
    from geolocation_analysis.geolocation.aws_client import (
        create_iot_wireless_client, estimate_position
    )

    client = create_iot_wireless_client(config)
    response = estimate_position(client, request)
"""

from typing import Any, Dict

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..core.context import Configuration, PositionRequest
from ..core.exceptions import TransportError
from ..logger import logger

SERVICE_NAME = "iotwireless"


def create_iot_wireless_client(config: Configuration) -> Any:
    """
    Create the boto3 IoT Wireless client with the analysis credentials.

    Args:
        config: Validated analysis configuration

    Returns:
        boto3 iotwireless client
    """
    return boto3.client(
        SERVICE_NAME,
        aws_access_key_id=config.access_key_id,
        aws_secret_access_key=config.secret_access_key,
        region_name=config.region,
    )


def estimate_position(client: Any, request: PositionRequest) -> Dict[str, Any]:
    """
    Call GetPositionEstimate.

    The GeoJsonPayload stream is read here, so the returned response holds
    the raw document bytes.

    Raises:
        TransportError: If the AWS call or the payload read fails for any
            SDK reason
    """
    kwargs = request.to_aws_kwargs()
    logger.debug(f"Requesting position estimate with sources: {sorted(k for k in kwargs if k != 'Timestamp')}")
    try:
        response = client.get_position_estimate(**kwargs)
        if response is not None and hasattr(response.get("GeoJsonPayload"), "read"):
            response = dict(response, GeoJsonPayload=response["GeoJsonPayload"].read())
    except (ClientError, BotoCoreError) as e:
        raise TransportError(SERVICE_NAME, original_error=e)
    return response
