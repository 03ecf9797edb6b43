"""
Analysis context and record classes.

Every invocation builds these objects fresh from the analysis environment
and the telemetry scope, and passes them explicitly to the functions that
need them. Nothing here reads the process environment.

Design Pattern: Dependency Injection
    - Environment settings are loaded into Configuration at the boundary
    - Scope dicts are wrapped into ScopeRecord once
    - Core functions receive these objects as parameters
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from .. import constants as CONSTANTS


@dataclass
class Configuration:
    """
    Validated settings taken from the analysis environment.

    Attributes:
        access_key_id: AWS access key ID
        secret_access_key: AWS secret access key
        region: AWS region hosting IoT Wireless (e.g., "us-east-1")
        accuracy_threshold: Minimum confidence level for an "accurate" estimate
    """

    access_key_id: str
    secret_access_key: str
    region: str
    accuracy_threshold: float = 0.0


@dataclass
class VariableNames:
    """Scope variable names the analysis looks up."""

    gnss_solver: str = CONSTANTS.DEFAULT_GNSS_SOLVER_VARIABLE
    ip_address: str = CONSTANTS.DEFAULT_IP_ADDRESS_VARIABLE
    wifi_addresses: str = CONSTANTS.DEFAULT_WIFI_ADDRESSES_VARIABLE


@dataclass
class ScopeRecord:
    """
    A single telemetry record delivered in the analysis scope.

    Only `group`, `time` and `device` of the first record are carried into
    the device update; the other records are read for their values.
    """

    variable: str
    value: Any = None
    metadata: Optional[Dict[str, Any]] = None
    group: Optional[str] = None
    time: Any = None
    device: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScopeRecord":
        return cls(
            variable=data.get("variable", ""),
            value=data.get("value"),
            metadata=data.get("metadata"),
            group=data.get("group"),
            time=data.get("time"),
            device=data.get("device"),
        )


@dataclass(frozen=True)
class WifiAccessPoint:
    mac_address: str
    rss: int


@dataclass
class PositionRequest:
    """
    Input for the IoT Wireless GetPositionEstimate call.

    At least one of gnss_payload, ip_address and wifi_access_points is set
    by the builder; the timestamp is always present.
    """

    timestamp: datetime
    gnss_payload: Optional[str] = None
    ip_address: Optional[str] = None
    wifi_access_points: Optional[Tuple[WifiAccessPoint, ...]] = None

    def to_aws_kwargs(self) -> Dict[str, Any]:
        """
        Render the request as keyword arguments for boto3.

        Example:
            >>> client.get_position_estimate(**request.to_aws_kwargs())
        """
        kwargs: Dict[str, Any] = {"Timestamp": self.timestamp}
        if self.gnss_payload:
            kwargs["Gnss"] = {"Payload": self.gnss_payload}
        if self.ip_address:
            kwargs["Ip"] = {"IpAddress": self.ip_address}
        if self.wifi_access_points is not None:
            kwargs["WiFiAccessPoints"] = [
                {"MacAddress": ap.mac_address, "Rss": ap.rss}
                for ap in self.wifi_access_points
            ]
        return kwargs


@dataclass
class EstimatedLocation:
    """
    Location parsed from the GeoJSON document returned by IoT Wireless.

    Attributes:
        coordinates: GeoJSON order, (longitude, latitude)
        horizontal_confidence: horizontalConfidenceLevel property
        vertical_confidence: verticalConfidenceLevel property
    """

    coordinates: Tuple[float, float]
    horizontal_confidence: float
    vertical_confidence: float

    @property
    def longitude(self) -> float:
        return self.coordinates[0]

    @property
    def latitude(self) -> float:
        return self.coordinates[1]


@dataclass
class DeviceUpdate:
    """Data record written back to the device."""

    value: str
    location: Dict[str, float]
    metadata: Dict[str, Any]
    group: Optional[str] = None
    time: Any = None
    variable: str = CONSTANTS.ESTIMATED_LOCATION_VARIABLE

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "variable": self.variable,
            "value": self.value,
            "location": dict(self.location),
            "metadata": dict(self.metadata),
        }
        if self.group is not None:
            data["group"] = self.group
        if self.time is not None:
            data["time"] = self.time
        return data


@dataclass
class AnalysisOutcome:
    """
    Result of a single invocation.

    lambda_handler turns it into a statusCode/body response.
    """

    success: bool
    device_update: Optional[DeviceUpdate] = None
    error: Optional[Exception] = None
