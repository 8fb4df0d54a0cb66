from __future__ import annotations
import logging
from typing import Union
from thermolink.httpclient import HttpClient

HEAT_ON_BODY = b"true"

class RemoteThermostatAPI:
    """The two cloud endpoints the control loop talks to. No retries here."""
    def __init__(self, client: HttpClient, measurement_url: str, status_url: str):
        self.client = client; self.measurement_url = measurement_url; self.status_url = status_url
        self._log = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def publish(self, measurement: Union[str, bytes]) -> None:
        """POST the sensor reading, unmodified, to the measurement endpoint."""
        r = self.client.request("POST", self.measurement_url, measurement)
        self._log.debug("published %r -> HTTP %d", measurement, r.status)

    def fetch_desired_state(self) -> bool:
        """True only when the status body is exactly b'true' (no trimming, case-sensitive)."""
        r = self.client.request("GET", self.status_url)
        self._log.debug("status body %r", r.content)
        return r.content == HEAT_ON_BODY
