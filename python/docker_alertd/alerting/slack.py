"""
Slack webhook notifier for alert delivery.

Posts the plain-text rendering of an alert to a Slack incoming webhook.
"""

from __future__ import annotations

from http.client import HTTPException
from typing import TYPE_CHECKING
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from docker_alertd.alerting.base import BaseNotifier, NotifierFactory
from docker_alertd.exceptions import DeliveryError

if TYPE_CHECKING:
    from docker_alertd.alerting.models import Alert
    from docker_alertd.config import SlackConfig

ERR_NO_WEBHOOK_URL = "no webhook URL specified"


class SlackNotifier(BaseNotifier):
    """
    Slack webhook notifier.

    The alert text is placed into the payload verbatim, without JSON
    escaping, so a quote or backslash in the alert yields a body Slack will
    reject. Any completed HTTP exchange counts as delivered; the status code
    is only logged.
    """

    name = "slack"
    validation_context = "slack settings validation fail"

    def __init__(self, config: SlackConfig) -> None:
        super().__init__(config)
        self._slack_config = config

    def is_omitted(self) -> bool:
        config = self._slack_config
        return not (config.webhook_url or config.timeout_seconds is not None)

    def missing_fields(self) -> list[str]:
        if not self._slack_config.webhook_url:
            return [ERR_NO_WEBHOOK_URL]
        return []

    def build_payload(self, alert: Alert) -> str:
        """Return the JSON body for an alert."""
        return f'{{"text": "{alert.dump()}"}}'

    def send(self, alert: Alert) -> None:
        """
        Post an alert to the webhook.

        Raises:
            DeliveryError: If the request cannot be completed.
        """
        try:
            request = Request(
                self._slack_config.webhook_url,
                data=self.build_payload(alert).encode("utf-8"),
                headers={"Content-Type": "application/json"},
                method="POST",
            )
            with urlopen(request, **self._timeout_kwargs()) as response:
                response.read()
        except HTTPError as e:
            e.close()
            self._logger.warning("slack_http_status", status_code=e.code, reason=e.reason)
        except (URLError, OSError, HTTPException, ValueError) as e:
            self._logger.error("slack_connection_error", error=str(e))
            raise DeliveryError.transport(self.name, e) from e

        self._logger.info("sent alert to slack")


NotifierFactory.register(SlackNotifier.name, SlackNotifier)
