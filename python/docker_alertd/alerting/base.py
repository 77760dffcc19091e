"""
Base classes for the alerting framework.

Every notifier extends BaseNotifier: it declares which of its settings are
required, how to tell that the channel was left out entirely, and how to
deliver one Alert.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar

import structlog

from docker_alertd.exceptions import ConfigurationError

if TYPE_CHECKING:
    from docker_alertd.alerting.models import Alert

logger = structlog.get_logger(__name__)


class DeliveryStatus(str, Enum):
    """Outcome of handing an alert to one notifier."""

    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class DeliveryResult:
    """
    Result of one notifier's delivery attempt.

    Attributes:
        notifier_name: Name of the notifier that processed the alert.
        status: Delivery status.
        error: Error message if failed.
    """

    notifier_name: str
    status: DeliveryStatus
    error: str | None = None

    @property
    def is_success(self) -> bool:
        """Check if delivery was successful."""
        return self.status == DeliveryStatus.SENT


class BaseNotifier(ABC):
    """
    Abstract base class for all notifier implementations.

    Subclasses set ``name`` and ``validation_context`` and implement
    is_omitted, missing_fields and send.
    """

    name: ClassVar[str] = "base"
    validation_context: ClassVar[str] = "settings validation fail"

    def __init__(self, config: Any) -> None:
        self._config = config

    @property
    def config(self) -> Any:
        """The settings this notifier was built from."""
        return self._config

    @property
    def _logger(self) -> Any:
        # Bound per call so the current structlog configuration applies.
        return structlog.get_logger(type(self).__module__).bind(
            notifier=self.name, **self._log_context()
        )

    def _log_context(self) -> dict[str, Any]:
        """Extra fields bound to every log line from this notifier."""
        return {}

    def _timeout_kwargs(self) -> dict[str, Any]:
        """Transport timeout argument, empty when the default should apply."""
        timeout = getattr(self._config, "timeout_seconds", None)
        return {} if timeout is None else {"timeout": timeout}

    @abstractmethod
    def is_omitted(self) -> bool:
        """Return True if every channel setting is empty."""

    @abstractmethod
    def missing_fields(self) -> list[str]:
        """Return a description of every missing required setting."""

    def validate(self) -> None:
        """
        Check the settings without doing any I/O.

        An omitted channel is valid. Otherwise all missing settings are
        reported together.

        Raises:
            ConfigurationError: If any required setting is missing.
        """
        if self.is_omitted():
            return

        missing = self.missing_fields()
        if missing:
            raise ConfigurationError.missing_fields(
                self.validation_context, self.name, missing
            )

    @abstractmethod
    def send(self, alert: Alert) -> None:
        """
        Deliver an alert.

        Args:
            alert: The alert to deliver. Must not be modified.

        Raises:
            DeliveryError: If the transport fails.
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class NotifierFactory:
    """Registry mapping channel names to notifier classes."""

    _registry: ClassVar[dict[str, type[BaseNotifier]]] = {}

    @classmethod
    def register(cls, notifier_type: str, notifier_class: type[BaseNotifier]) -> None:
        """
        Register a notifier type.

        Args:
            notifier_type: Unique type identifier.
            notifier_class: Notifier class to register.
        """
        cls._registry[notifier_type] = notifier_class
        logger.debug("notifier_registered", notifier_type=notifier_type)

    @classmethod
    def create(cls, notifier_type: str, config: Any) -> BaseNotifier:
        """
        Create a notifier instance.

        Raises:
            ValueError: If notifier type is not registered.
        """
        if notifier_type not in cls._registry:
            raise ValueError(f"Unknown notifier type: {notifier_type}")

        return cls._registry[notifier_type](config)

    @classmethod
    def available_types(cls) -> list[str]:
        """Get list of registered notifier types."""
        return list(cls._registry.keys())
