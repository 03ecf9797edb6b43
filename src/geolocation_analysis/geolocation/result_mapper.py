"""
Geolocation response mapping.

Extracts the estimated location from a GetPositionEstimate response and
turns it into the device update written back to the platform.

Response Shape (boto3):
    {
        "GeoJsonPayload": StreamingBody(b'{"coordinates": [lng, lat, ...],
                                         "properties": {"horizontalConfidenceLevel": ...,
                                                        "verticalConfidenceLevel": ...}}'),
        "ResponseMetadata": {...}
    }

Value Convention:
    The device update value is "accurate" or "not accurate"; the coordinates
    travel in the update's location field.
"""

import json
from typing import Any, Dict, Mapping, Optional, Union

from .. import constants as CONSTANTS
from ..core.context import DeviceUpdate, EstimatedLocation, ScopeRecord
from ..core.exceptions import ResponseError

NO_LOCATION_MESSAGE = "No estimated location found"


def _read_document(payload: Any) -> Optional[Dict[str, Any]]:
    """Deserialize the embedded GeoJSON document, None if unusable."""
    if payload is None:
        return None
    if isinstance(payload, Mapping):
        return dict(payload)

    # botocore StreamingBody
    if hasattr(payload, "read"):
        payload = payload.read()

    try:
        if isinstance(payload, (bytes, bytearray)):
            payload = payload.decode("utf-8")
        if not isinstance(payload, str) or not payload.strip():
            return None
        document = json.loads(payload)
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
    return document if isinstance(document, dict) else None


def _to_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def extract_estimated_location(response: Optional[Mapping[str, Any]]) -> EstimatedLocation:
    """
    Extract the estimated location from the geolocation response.

    Args:
        response: Raw GetPositionEstimate response, or None if the call
            returned nothing

    Returns:
        EstimatedLocation with coordinates and both confidence levels

    Raises:
        ResponseError: If the response is absent, or if the document holds no
            coordinate pair and confidence levels
    """
    if response is None:
        raise ResponseError("No response from AWS")

    document = _read_document(response.get("GeoJsonPayload"))
    if not document:
        raise ResponseError(NO_LOCATION_MESSAGE)

    coordinates = document.get("coordinates")
    properties = document.get("properties")
    if not isinstance(coordinates, (list, tuple)) or len(coordinates) < 2:
        raise ResponseError(NO_LOCATION_MESSAGE)
    if not isinstance(properties, Mapping):
        raise ResponseError(NO_LOCATION_MESSAGE)

    lng = _to_number(coordinates[0])
    lat = _to_number(coordinates[1])
    horizontal = _to_number(properties.get("horizontalConfidenceLevel"))
    vertical = _to_number(properties.get("verticalConfidenceLevel"))
    if None in (lng, lat, horizontal, vertical):
        raise ResponseError(NO_LOCATION_MESSAGE)

    return EstimatedLocation(
        coordinates=(lng, lat),
        horizontal_confidence=horizontal,
        vertical_confidence=vertical,
    )


def is_accuracy_met(location: EstimatedLocation, accuracy_threshold: float) -> bool:
    """Either axis reaching the threshold (inclusive) is enough."""
    return (
        location.horizontal_confidence >= accuracy_threshold
        or location.vertical_confidence >= accuracy_threshold
    )


def build_device_update(
    location: EstimatedLocation,
    accuracy_threshold: Union[float, str],
    scope_record: ScopeRecord
) -> DeviceUpdate:
    """
    Build the estimated_location record for the device.

    Args:
        location: Location extracted from the geolocation response
        accuracy_threshold: Desired confidence level, number or numeric string
        scope_record: Originating scope record; only group and time are read

    Returns:
        DeviceUpdate with the accuracy status, coordinates and confidence levels

    Example:
        >>> update = build_device_update(location, 10, scope[0])
        >>> update.metadata["color"]
        "green"
    """
    accurate = is_accuracy_met(location, float(accuracy_threshold))

    return DeviceUpdate(
        value=CONSTANTS.VALUE_ACCURATE if accurate else CONSTANTS.VALUE_NOT_ACCURATE,
        location={
            "lat": location.latitude,
            "lng": location.longitude,
        },
        metadata={
            "horizontalAccuracy": location.horizontal_confidence,
            "verticalAccuracy": location.vertical_confidence,
            "color": CONSTANTS.COLOR_ACCURATE if accurate else CONSTANTS.COLOR_NOT_ACCURATE,
        },
        group=scope_record.group,
        time=scope_record.time,
    )
