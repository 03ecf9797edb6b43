"""
Analysis entry point.

Estimates a device position from the telemetry scope and writes the result
back to the device:

    environment -> Configuration -> PositionRequest -> GetPositionEstimate
                -> EstimatedLocation -> DeviceUpdate -> device data write

Every error is caught here, logged, and ends the invocation without a device
write. Nothing is re-raised.
"""

import json
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .core.config_loader import load_configuration, load_variable_names
from .core.context import AnalysisOutcome, Configuration, ScopeRecord, VariableNames
from .core.exceptions import AnalysisError, PayloadError, TransportError
from .geolocation.aws_client import create_iot_wireless_client, estimate_position
from .geolocation.payload import build_position_request
from .geolocation.result_mapper import build_device_update, extract_estimated_location
from .tagoio.device_writer import DeviceDataWriter
from . import constants as CONSTANTS
from . import logger as logger_module


def _find_record(records: List[ScopeRecord], variable: str) -> Optional[ScopeRecord]:
    return next((r for r in records if r.variable == variable), None)


def extract_scope_values(
    records: List[ScopeRecord],
    names: VariableNames
) -> Tuple[str, str, Optional[Mapping[str, int]]]:
    """
    Pick the GNSS payload, IP address and WiFi map out of the scope.

    Only the first segment of a ';'-separated IP value is used. The WiFi map
    is the metadata of the WiFi record.

    Raises:
        PayloadError: If the WiFi record metadata is not a MAC -> RSSI map
    """
    gnss_record = _find_record(records, names.gnss_solver)
    gnss_value = str(gnss_record.value) if gnss_record and gnss_record.value else ""

    ip_record = _find_record(records, names.ip_address)
    ip_address = ""
    if ip_record and ip_record.value:
        ip_address = str(ip_record.value).split(CONSTANTS.IP_ADDRESS_SEPARATOR)[0].strip()

    wifi_record = _find_record(records, names.wifi_addresses)
    wifi_addresses = wifi_record.metadata if wifi_record else None
    if wifi_addresses is not None and not isinstance(wifi_addresses, Mapping):
        raise PayloadError("Wifi Addresses must be a map of MAC address to RSSI")

    return gnss_value, ip_address, wifi_addresses


def run_analysis(
    environment: List[Dict[str, Any]],
    scope: List[Dict[str, Any]],
    geolocation_client: Any = None,
    device_writer: Optional[DeviceDataWriter] = None,
    client_factory: Optional[Callable[[Configuration], Any]] = None
) -> AnalysisOutcome:
    """
    Run one invocation of the analysis.

    Args:
        environment: Analysis environment as a list of {"key", "value"} dicts
        scope: Telemetry records delivered to this invocation
        geolocation_client: Prebuilt iotwireless client (built from the
            configuration when None)
        device_writer: Prebuilt writer (built from the process environment
            when None)
        client_factory: Builds the iotwireless client from a Configuration
            (create_iot_wireless_client when None)

    Returns:
        AnalysisOutcome with the written device update, or the error that
        stopped the invocation
    """
    logger = logger_module.logger
    logger.info("Starting Analysis")

    try:
        config = load_configuration(environment)
        names = load_variable_names(environment)
        writer = device_writer or DeviceDataWriter.from_environment()

        records = [ScopeRecord.from_dict(item) for item in scope or []]
        if not records:
            raise PayloadError("No Variables value found in the scope")

        gnss_value, ip_address, wifi_addresses = extract_scope_values(records, names)
        request = build_position_request(gnss_value, ip_address, wifi_addresses)

        client = geolocation_client or (client_factory or create_iot_wireless_client)(config)
        response = estimate_position(client, request)
        location = extract_estimated_location(response)

        target = records[0]
        update = build_device_update(location, config.accuracy_threshold, target)
        writer.send_device_data(target.device, update)

    except AnalysisError as e:
        logger.error(str(e))
        logger_module.print_stack_trace()
        return AnalysisOutcome(success=False, error=e)
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        logger_module.print_stack_trace()
        return AnalysisOutcome(success=False, error=e)

    logger.info(f"Estimated location written to device {target.device}: {update.value}")
    logger.info("Analysis Finished")
    return AnalysisOutcome(success=True, device_update=update)


def _status_code(outcome: AnalysisOutcome) -> int:
    if outcome.success:
        return 200
    if isinstance(outcome.error, TransportError):
        return 502
    if isinstance(outcome.error, AnalysisError):
        return 400
    return 500


def lambda_handler(event, context):
    logger = logger_module.configure_logger_from_environment()
    logger.debug("Event: " + json.dumps(event, default=str))

    if not isinstance(event, dict):
        event = {}
    environment = event.get("environment", [])
    scope = event.get("data", event.get("scope", []))

    outcome = run_analysis(environment, scope)

    if outcome.success:
        body = outcome.device_update.to_dict()
    else:
        body = {"error": str(outcome.error)}

    return {
        "statusCode": _status_code(outcome),
        "body": json.dumps(body, default=str)
    }
