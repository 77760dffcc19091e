"""
Pushover notifier for alert delivery.

Submits the plain-text rendering of an alert to the Pushover messages API
as a form-encoded POST.
"""

from __future__ import annotations

from http.client import HTTPException
from typing import TYPE_CHECKING
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from docker_alertd.alerting.base import BaseNotifier, NotifierFactory
from docker_alertd.exceptions import DeliveryError

if TYPE_CHECKING:
    from docker_alertd.alerting.models import Alert
    from docker_alertd.config import PushoverConfig

ERR_NO_API_TOKEN = "no API token specified"
ERR_NO_USER_KEY = "no user key specified"
ERR_NO_API_URL = "no API URL specified"


class PushoverNotifier(BaseNotifier):
    """Pushover API notifier. Response status codes are logged, not enforced."""

    name = "pushover"
    validation_context = "pushover settings validation fail"

    def __init__(self, config: PushoverConfig) -> None:
        super().__init__(config)
        self._pushover_config = config

    def is_omitted(self) -> bool:
        config = self._pushover_config
        return not (
            config.api_token
            or config.user_key
            or config.api_url
            or config.timeout_seconds is not None
        )

    def missing_fields(self) -> list[str]:
        config = self._pushover_config
        missing: list[str] = []

        if not config.api_token:
            missing.append(ERR_NO_API_TOKEN)
        if not config.user_key:
            missing.append(ERR_NO_USER_KEY)
        if not config.api_url:
            missing.append(ERR_NO_API_URL)

        return missing

    def build_body(self, alert: Alert) -> str:
        """Return the form-encoded body for an alert."""
        config = self._pushover_config
        return urlencode(
            {
                "token": config.api_token,
                "user": config.user_key,
                "message": alert.dump(),
            }
        )

    def send(self, alert: Alert) -> None:
        """
        Submit an alert to the Pushover API.

        Raises:
            DeliveryError: If the request cannot be completed.
        """
        try:
            request = Request(
                self._pushover_config.api_url,
                data=self.build_body(alert).encode("utf-8"),
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                method="POST",
            )
            with urlopen(request, **self._timeout_kwargs()) as response:
                response.read()
        except HTTPError as e:
            e.close()
            self._logger.warning(
                "pushover_http_status", status_code=e.code, reason=e.reason
            )
        except (URLError, OSError, HTTPException, ValueError) as e:
            self._logger.error("pushover_connection_error", error=str(e))
            raise DeliveryError.transport(self.name, e) from e

        self._logger.info("sent alert to pushover")


NotifierFactory.register(PushoverNotifier.name, PushoverNotifier)
