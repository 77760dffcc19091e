"""
Exception hierarchy for docker-alertd.

- AlertdError: Base exception for all docker-alertd errors
- ConfigurationError: Notifier settings are incomplete or inconsistent
- DeliveryError: A notifier failed to hand an alert to its transport

Each exception includes:
- error_code: Machine-readable error identifier
- context: Additional structured data for debugging
- is_retryable: Whether the operation can be retried
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Machine-readable error codes for categorization and monitoring."""

    # Configuration errors (1xxx)
    CONFIG_INVALID = "ALERTD_1001"
    CONFIG_MISSING = "ALERTD_1002"
    CONFIG_VALIDATION = "ALERTD_1003"
    CONFIG_AGGREGATE = "ALERTD_1004"

    # Delivery errors (2xxx)
    DELIVERY_FAILED = "ALERTD_2001"
    DELIVERY_TRANSPORT = "ALERTD_2002"

    # General errors (9xxx)
    UNKNOWN = "ALERTD_9999"


@dataclass
class AlertdError(Exception):
    """
    Base exception for all docker-alertd errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error identifier
        context: Additional structured data for debugging
        is_retryable: Whether the operation can be safely retried
        cause: Original exception that caused this error
    """

    message: str
    error_code: ErrorCode = ErrorCode.UNKNOWN
    context: dict[str, Any] = field(default_factory=dict)
    is_retryable: bool = False
    cause: BaseException | None = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"context={self.context!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code.value,
            "message": self.message,
            "context": self.context,
            "is_retryable": self.is_retryable,
            "cause": str(self.cause) if self.cause else None,
        }


@dataclass
class ConfigurationError(AlertdError):
    """Raised when notifier settings are invalid."""

    error_code: ErrorCode = ErrorCode.CONFIG_INVALID

    @property
    def missing(self) -> list[str]:
        """Descriptions of every missing field, if this error reports any."""
        return list(self.context.get("missing", []))

    @classmethod
    def missing_fields(
        cls, context: str, notifier: str, missing: list[str]
    ) -> ConfigurationError:
        """Create error listing every missing field of one notifier."""
        return cls(
            message=f"{context}: {', '.join(missing)}",
            error_code=ErrorCode.CONFIG_VALIDATION,
            context={"notifier": notifier, "missing": list(missing)},
        )

    @classmethod
    def aggregate(cls, failures: Mapping[str, AlertdError]) -> ConfigurationError:
        """Create one error naming every notifier that failed validation."""
        described = "; ".join(f"{name}: {error}" for name, error in failures.items())
        return cls(
            message=f"notifier validation failed ({described})",
            error_code=ErrorCode.CONFIG_AGGREGATE,
            context={"notifiers": list(failures)},
        )


@dataclass
class DeliveryError(AlertdError):
    """Raised when a notifier cannot deliver an alert."""

    error_code: ErrorCode = ErrorCode.DELIVERY_FAILED

    @property
    def notifier(self) -> str | None:
        """Name of the notifier that failed."""
        return self.context.get("notifier")

    @classmethod
    def wrapped(
        cls, notifier: str, context: str, cause: BaseException
    ) -> DeliveryError:
        """Create error whose message prefixes the cause with a context string."""
        return cls(
            message=f"{context}: {cause}",
            error_code=ErrorCode.DELIVERY_FAILED,
            context={"notifier": notifier},
            cause=cause,
        )

    @classmethod
    def transport(cls, notifier: str, cause: BaseException) -> DeliveryError:
        """Create error carrying the transport failure text as-is."""
        return cls(
            message=str(cause),
            error_code=ErrorCode.DELIVERY_TRANSPORT,
            context={"notifier": notifier},
            cause=cause,
        )
