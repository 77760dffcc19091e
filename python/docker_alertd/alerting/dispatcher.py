"""
Alert dispatch across every configured notifier.

The dispatcher validates all notifiers up front and then fans each alert
out to every channel that was not omitted. A failure in one channel is
logged and recorded but never stops the others.
"""

from __future__ import annotations

from concurrent import futures
from typing import TYPE_CHECKING, Any

import structlog

from docker_alertd.alerting.base import (
    BaseNotifier,
    DeliveryResult,
    DeliveryStatus,
    NotifierFactory,
)
from docker_alertd.exceptions import AlertdError, ConfigurationError

# Backends register themselves with NotifierFactory on import.
from docker_alertd.alerting import email as _email  # noqa: F401
from docker_alertd.alerting import pushover as _pushover  # noqa: F401
from docker_alertd.alerting import slack as _slack  # noqa: F401

if TYPE_CHECKING:
    from collections.abc import Iterable

    from docker_alertd.alerting.models import Alert
    from docker_alertd.config import AlertingConfig

logger = structlog.get_logger(__name__)


class AlertDispatcher:
    """
    Holds the configured notifiers and delivers alerts to each of them.

    Sends run one after another by default. With ``parallel=True`` each
    notifier gets its own worker thread and dispatch waits for all of them.
    """

    def __init__(
        self,
        notifiers: Iterable[BaseNotifier],
        parallel: bool = False,
        max_workers: int | None = None,
    ) -> None:
        """
        Initialize the dispatcher.

        Args:
            notifiers: Notifiers to deliver to, in reporting order.
            parallel: Send to notifiers concurrently.
            max_workers: Thread limit for parallel sends.
        """
        self._notifiers = list(notifiers)
        self._parallel = parallel
        self._max_workers = max_workers

    @property
    def _logger(self) -> Any:
        return logger.bind(component="alert-dispatcher")

    @classmethod
    def from_config(cls, config: AlertingConfig) -> AlertDispatcher:
        """Build a dispatcher with one notifier per configured channel."""
        notifiers = [
            NotifierFactory.create("email", config.email),
            NotifierFactory.create("slack", config.slack),
            NotifierFactory.create("pushover", config.pushover),
        ]
        return cls(notifiers, parallel=config.parallel, max_workers=config.max_workers)

    @property
    def notifiers(self) -> list[BaseNotifier]:
        """All notifiers, including omitted ones."""
        return list(self._notifiers)

    @property
    def active_notifiers(self) -> list[BaseNotifier]:
        """Notifiers whose channel was configured."""
        return [n for n in self._notifiers if not n.is_omitted()]

    def validate_all(self) -> None:
        """
        Validate every notifier.

        Raises:
            ConfigurationError: Naming each notifier that failed and why.
        """
        failures: dict[str, AlertdError] = {}

        for notifier in self._notifiers:
            try:
                notifier.validate()
            except ConfigurationError as e:
                failures[notifier.name] = e

        if failures:
            error = ConfigurationError.aggregate(failures)
            self._logger.error("notifier_validation_failed", notifiers=list(failures))
            raise error

        self._logger.debug(
            "notifiers_validated",
            active=[n.name for n in self.active_notifiers],
        )

    def dispatch(self, alert: Alert) -> list[DeliveryResult]:
        """
        Deliver an alert to every active notifier.

        Args:
            alert: Alert to deliver.

        Returns:
            One result per notifier, in notifier order.
        """
        if not self._parallel:
            return [self._deliver(notifier, alert) for notifier in self._notifiers]

        with futures.ThreadPoolExecutor(
            max_workers=self._max_workers,
            thread_name_prefix="alertd-dispatch",
        ) as executor:
            pending = [
                executor.submit(self._deliver, notifier, alert)
                for notifier in self._notifiers
            ]
            return [f.result() for f in pending]

    def _deliver(self, notifier: BaseNotifier, alert: Alert) -> DeliveryResult:
        if notifier.is_omitted():
            return DeliveryResult(notifier_name=notifier.name, status=DeliveryStatus.SKIPPED)

        try:
            notifier.send(alert)
        except AlertdError as e:
            self._logger.error(
                "delivery_failed",
                notifier=notifier.name,
                error=str(e),
                error_code=e.error_code.value,
            )
            return DeliveryResult(
                notifier_name=notifier.name,
                status=DeliveryStatus.FAILED,
                error=str(e),
            )
        except Exception as e:
            self._logger.exception("delivery_error", notifier=notifier.name, error=str(e))
            return DeliveryResult(
                notifier_name=notifier.name,
                status=DeliveryStatus.FAILED,
                error=str(e),
            )

        return DeliveryResult(notifier_name=notifier.name, status=DeliveryStatus.SENT)
