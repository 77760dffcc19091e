"""
docker-alertd - alert delivery core

Formats and delivers container health alerts through independently
configured channels:
- Email, Slack and Pushover notifiers with per-channel validation
- A dispatcher that isolates delivery failures per channel
- pydantic-settings configuration and structlog logging
"""

__version__ = "0.1.0"
__all__ = [
    "alerting",
    "config",
    "exceptions",
    "logging",
]
