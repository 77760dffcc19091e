"""
Alert delivery for docker-alertd.

An Alert raised by the container monitor is fanned out by AlertDispatcher
to every configured channel:
- Email over authenticated SMTP (HTML body)
- Slack incoming webhook (JSON body)
- Pushover messages API (form-encoded body)

A channel whose settings are all empty is treated as omitted.
"""

from docker_alertd.alerting.base import (
    BaseNotifier,
    DeliveryResult,
    DeliveryStatus,
    NotifierFactory,
)
from docker_alertd.alerting.dispatcher import AlertDispatcher
from docker_alertd.alerting.email import EmailNotifier
from docker_alertd.alerting.models import Alert, compose_subject
from docker_alertd.alerting.pushover import PushoverNotifier
from docker_alertd.alerting.slack import SlackNotifier

__all__ = [
    "Alert",
    "AlertDispatcher",
    "BaseNotifier",
    "DeliveryResult",
    "DeliveryStatus",
    "EmailNotifier",
    "NotifierFactory",
    "PushoverNotifier",
    "SlackNotifier",
    "compose_subject",
]
