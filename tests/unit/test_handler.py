"""
Tests for the analysis entry point.

External collaborators (IoT Wireless client, device writer) are MagicMocks;
the tests check the control flow: which errors stop the run, and that no
device write happens after an error.
"""
import json
import pytest
from unittest.mock import MagicMock, patch

from botocore.exceptions import ClientError, ReadTimeoutError

from geolocation_analysis.core.context import ScopeRecord, VariableNames
from geolocation_analysis.core.exceptions import (
    ConfigurationError,
    PayloadError,
    ResponseError,
    TransportError,
)
from geolocation_analysis.handler import extract_scope_values, lambda_handler, run_analysis

DOCUMENT = json.dumps({
    "coordinates": [10, 20],
    "properties": {"horizontalConfidenceLevel": 10, "verticalConfidenceLevel": 12},
})


@pytest.fixture
def client(geojson_response):
    client = MagicMock()
    client.get_position_estimate.return_value = geojson_response(DOCUMENT)
    return client


@pytest.fixture
def writer():
    return MagicMock()


class TestExtractScopeValues:

    def test_ip_first_segment(self, scope_record):
        records = [ScopeRecord.from_dict(scope_record)]

        gnss, ip, wifi = extract_scope_values(records, VariableNames())

        assert gnss == ""
        assert ip == "127.0.0.1"
        assert wifi is None

    def test_wifi_from_metadata(self):
        records = [ScopeRecord(variable="wifi_addresses", value="2", metadata={"A": -75, "B": -56})]

        _, _, wifi = extract_scope_values(records, VariableNames())

        assert wifi == {"A": -75, "B": -56}

    def test_custom_variable_names(self):
        records = [
            ScopeRecord(variable="lr_gnss", value="ABCDEF"),
            ScopeRecord(variable="gnss_solver", value="IGNORED"),
        ]

        gnss, _, _ = extract_scope_values(records, VariableNames(gnss_solver="lr_gnss"))

        assert gnss == "ABCDEF"

    def test_wifi_metadata_not_a_map(self):
        records = [ScopeRecord(variable="wifi_addresses", metadata=["A", "B"])]

        with pytest.raises(PayloadError):
            extract_scope_values(records, VariableNames())


class TestRunAnalysis:

    def test_success_writes_device_update(self, analysis_environment, scope_record, client, writer):
        outcome = run_analysis(analysis_environment, [scope_record], geolocation_client=client, device_writer=writer)

        assert outcome.success is True
        assert outcome.error is None
        client.get_position_estimate.assert_called_once()
        assert client.get_position_estimate.call_args.kwargs["Ip"] == {"IpAddress": "127.0.0.1"}

        writer.send_device_data.assert_called_once()
        device_id, update = writer.send_device_data.call_args.args
        assert device_id == "123abc123"
        assert update is outcome.device_update
        assert update.value == "accurate"
        assert update.location == {"lat": 20, "lng": 10}
        assert update.group == scope_record["group"]
        assert update.time == scope_record["time"]

    def test_threshold_not_met(self, analysis_environment, scope_record, client, writer):
        environment = [e for e in analysis_environment if e["key"] != "DESIREABLE_ACCURACY_PERCENT"]
        environment.append({"key": "DESIREABLE_ACCURACY_PERCENT", "value": "15"})

        outcome = run_analysis(environment, [scope_record], geolocation_client=client, device_writer=writer)

        assert outcome.device_update.metadata["color"] == "red"
        assert outcome.device_update.value == "not accurate"

    def test_client_built_from_configuration(self, analysis_environment, scope_record, client, writer):
        factory = MagicMock(return_value=client)

        run_analysis(analysis_environment, [scope_record], device_writer=writer, client_factory=factory)

        config = factory.call_args.args[0]
        assert config.region == "us-east-1"
        assert config.accuracy_threshold == 10.0

    def test_configuration_error_stops_before_aws(self, scope_record, client, writer):
        outcome = run_analysis([], [scope_record], geolocation_client=client, device_writer=writer)

        assert outcome.success is False
        assert isinstance(outcome.error, ConfigurationError)
        client.get_position_estimate.assert_not_called()
        writer.send_device_data.assert_not_called()

    def test_no_scope_data(self, analysis_environment, client, writer):
        scope = [{"variable": "temperature", "value": 21, "device": "123abc123"}]

        outcome = run_analysis(analysis_environment, scope, geolocation_client=client, device_writer=writer)

        assert isinstance(outcome.error, PayloadError)
        assert str(outcome.error) == "No data to create the payload"
        client.get_position_estimate.assert_not_called()

    def test_empty_scope(self, analysis_environment, client, writer):
        outcome = run_analysis(analysis_environment, [], geolocation_client=client, device_writer=writer)

        assert isinstance(outcome.error, PayloadError)
        writer.send_device_data.assert_not_called()

    def test_aws_failure_no_device_write(self, analysis_environment, scope_record, client, writer):
        client.get_position_estimate.side_effect = ClientError(
            {"Error": {"Code": "AccessDeniedException", "Message": "denied"}}, "GetPositionEstimate"
        )

        outcome = run_analysis(analysis_environment, [scope_record], geolocation_client=client, device_writer=writer)

        assert isinstance(outcome.error, TransportError)
        writer.send_device_data.assert_not_called()

    def test_empty_geojson_no_device_write(self, analysis_environment, scope_record, client, writer, geojson_response):
        client.get_position_estimate.return_value = geojson_response("{}")

        outcome = run_analysis(analysis_environment, [scope_record], geolocation_client=client, device_writer=writer)

        assert isinstance(outcome.error, ResponseError)
        assert str(outcome.error) == "No estimated location found"
        writer.send_device_data.assert_not_called()

    def test_none_response(self, analysis_environment, scope_record, client, writer):
        client.get_position_estimate.return_value = None

        outcome = run_analysis(analysis_environment, [scope_record], geolocation_client=client, device_writer=writer)

        assert str(outcome.error) == "No response from AWS"

    def test_invalid_utf8_geojson(self, analysis_environment, scope_record, client, writer, geojson_response):
        client.get_position_estimate.return_value = geojson_response(b"\xff\xfe{}")

        outcome = run_analysis(analysis_environment, [scope_record], geolocation_client=client, device_writer=writer)

        assert isinstance(outcome.error, ResponseError)
        writer.send_device_data.assert_not_called()

    def test_geojson_read_timeout_is_transport_error(self, analysis_environment, scope_record, client, writer):
        body = MagicMock()
        body.read.side_effect = ReadTimeoutError(endpoint_url="https://api.iotwireless")
        client.get_position_estimate.return_value = {"GeoJsonPayload": body}

        outcome = run_analysis(analysis_environment, [scope_record], geolocation_client=client, device_writer=writer)

        assert isinstance(outcome.error, TransportError)
        writer.send_device_data.assert_not_called()

    def test_device_write_failure_is_not_raised(self, analysis_environment, scope_record, client, writer):
        writer.send_device_data.side_effect = TransportError("tagoio", device="123abc123")

        outcome = run_analysis(analysis_environment, [scope_record], geolocation_client=client, device_writer=writer)

        assert outcome.success is False
        assert isinstance(outcome.error, TransportError)

    def test_unexpected_error_is_not_raised(self, analysis_environment, scope_record, client, writer):
        client.get_position_estimate.side_effect = RuntimeError("boom")

        outcome = run_analysis(analysis_environment, [scope_record], geolocation_client=client, device_writer=writer)

        assert outcome.success is False
        assert isinstance(outcome.error, RuntimeError)

    def test_missing_analysis_token(self, monkeypatch, analysis_environment, scope_record, client):
        monkeypatch.delenv("T_ANALYSIS_TOKEN")

        outcome = run_analysis(analysis_environment, [scope_record], geolocation_client=client)

        assert isinstance(outcome.error, ConfigurationError)
        client.get_position_estimate.assert_not_called()


class TestLambdaHandler:

    @patch("geolocation_analysis.handler.run_analysis")
    def test_passes_environment_and_data(self, mock_run, analysis_environment, scope_record):
        mock_run.return_value = MagicMock(success=False, error=PayloadError("No data to create the payload"))

        response = lambda_handler({"environment": analysis_environment, "data": [scope_record]}, None)

        mock_run.assert_called_once_with(analysis_environment, [scope_record])
        assert response["statusCode"] == 400
        assert json.loads(response["body"]) == {"error": "No data to create the payload"}

    @patch("geolocation_analysis.handler.DeviceDataWriter.send_device_data")
    @patch("geolocation_analysis.handler.create_iot_wireless_client")
    def test_end_to_end(self, mock_factory, mock_send, analysis_environment, scope_record, client):
        mock_factory.return_value = client

        response = lambda_handler({"environment": analysis_environment, "scope": [scope_record]}, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["variable"] == "estimated_location"
        assert body["metadata"]["color"] == "green"
        mock_send.assert_called_once()

    def test_transport_error_status(self, analysis_environment, scope_record):
        with patch("geolocation_analysis.handler.run_analysis") as mock_run:
            mock_run.return_value = MagicMock(success=False, error=TransportError("iotwireless"))
            response = lambda_handler({"environment": analysis_environment, "data": [scope_record]}, None)

        assert response["statusCode"] == 502

    @pytest.mark.parametrize("event", [None, [], "raw"])
    def test_non_dict_event_does_not_raise(self, event):
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        assert "Missing environment variables" in json.loads(response["body"])["error"]
