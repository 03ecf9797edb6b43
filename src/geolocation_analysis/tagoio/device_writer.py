"""
TagoIO device data writer.

Sends the estimated_location record to the device through the TagoIO REST
API, authenticated with the analysis token.

Endpoint:
    POST {api_url}/device/{device_id}/data
    Header: Authorization: <analysis token>
"""

import json
import os
from typing import Any, Dict, Optional

import requests

from .. import constants as CONSTANTS
from ..core.context import DeviceUpdate
from ..core.env_utils import require_env
from ..core.exceptions import TransportError
from ..logger import logger

SERVICE_NAME = "tagoio"


class DeviceDataWriter:
    """
    Writes data records to TagoIO devices.

    Attributes:
        token: Analysis token used as the Authorization header
        api_url: Base URL of the TagoIO API
        timeout: HTTP request timeout in seconds
    """

    def __init__(self, token: str, api_url: str = CONSTANTS.DEFAULT_TAGOIO_API, timeout: int = CONSTANTS.HTTP_TIMEOUT):
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_environment(cls) -> "DeviceDataWriter":
        """
        Build a writer from the process environment.

        Raises:
            ConfigurationError: If T_ANALYSIS_TOKEN is missing
        """
        token = require_env(CONSTANTS.ENV_ANALYSIS_TOKEN)
        api_url = os.environ.get(CONSTANTS.ENV_TAGOIO_API, "").strip() or CONSTANTS.DEFAULT_TAGOIO_API
        return cls(token=token, api_url=api_url)

    def device_data_url(self, device_id: str) -> str:
        return f"{self.api_url}/device/{device_id}/data"

    def send_device_data(self, device_id: str, update: DeviceUpdate) -> Optional[Dict[str, Any]]:
        """
        POST the update to the device.

        Args:
            device_id: TagoIO device ID taken from the first scope record
            update: Record to write

        Returns:
            Decoded JSON body of the platform response, None if it has none

        Raises:
            TransportError: On network errors or non-2xx responses
        """
        url = self.device_data_url(device_id)
        headers = {
            "Content-Type": "application/json",
            "Authorization": self.token,
        }
        data = json.dumps(update.to_dict(), default=str)

        try:
            response = requests.post(url, data=data, headers=headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(SERVICE_NAME, original_error=e, device=device_id)

        logger.debug(f"Device {device_id} accepted {update.variable}")
        try:
            return response.json()
        except ValueError:
            return None
