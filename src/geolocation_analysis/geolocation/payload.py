"""
Position request builder.

Turns the raw scope values (GNSS solver payload, IP address, WiFi RSSI map)
into a PositionRequest for IoT Wireless. The three sources are additive:
any combination may be present at once.
"""

from datetime import datetime, timezone
from itertools import islice
from typing import Mapping, Optional

from .. import constants as CONSTANTS
from ..core.context import PositionRequest, WifiAccessPoint
from ..core.exceptions import PayloadError


def _build_wifi_access_points(wifi_addresses: Mapping[str, int]) -> tuple:
    access_points = []
    for mac_address, rss in islice(wifi_addresses.items(), CONSTANTS.WIFI_ACCESS_POINTS_USED):
        try:
            access_points.append(WifiAccessPoint(mac_address=str(mac_address), rss=int(rss)))
        except (TypeError, ValueError):
            raise PayloadError(f"Invalid RSSI value for {mac_address}: {rss!r}")
    return tuple(access_points)


def build_position_request(
    gnss_value: Optional[str],
    ip_address: Optional[str],
    wifi_addresses: Optional[Mapping[str, int]]
) -> PositionRequest:
    """
    Build the position request from the scope values.

    Args:
        gnss_value: GNSS solver payload (hex string), may be empty
        ip_address: Single IP address, may be empty
        wifi_addresses: MAC address -> RSSI map in reported order, may be None

    Returns:
        PositionRequest with a capture timestamp and every supplied source

    Raises:
        PayloadError: If no source is present, or if fewer than 2 WiFi
            access points were reported
    """
    if not gnss_value and not ip_address and wifi_addresses is None:
        raise PayloadError("No data to create the payload")

    if wifi_addresses is not None and len(wifi_addresses) < CONSTANTS.WIFI_ACCESS_POINTS_USED:
        raise PayloadError("Wifi Addresses must have at least 2 addresses")

    request = PositionRequest(timestamp=datetime.now(timezone.utc))

    if gnss_value:
        request.gnss_payload = gnss_value

    if ip_address:
        request.ip_address = ip_address

    if wifi_addresses is not None:
        request.wifi_access_points = _build_wifi_access_points(wifi_addresses)

    return request
