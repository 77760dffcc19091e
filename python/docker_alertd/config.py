"""
Configuration management for docker-alertd.

Supports YAML config files with environment variable overrides. Each
notifier section defaults to all-empty, which marks the channel as omitted.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmailConfig(BaseModel):
    """SMTP settings for the email notifier."""

    model_config = ConfigDict(frozen=True)

    smtp: str = Field(default="", description="SMTP server hostname")
    username: str = Field(default="", description="SMTP authentication username")
    password: str = Field(default="", description="SMTP authentication password")
    port: int = Field(default=0, description="SMTP server port (0 means unset)")
    from_address: str = Field(default="", description="Sender address")
    to: tuple[str, ...] = Field(default=(), description="Recipient addresses")
    subject: str = Field(default="", description="Subject prefix")
    timeout_seconds: float | None = Field(
        default=None, description="SMTP connection timeout (None uses the transport default)"
    )


class SlackConfig(BaseModel):
    """Incoming webhook settings for the slack notifier."""

    model_config = ConfigDict(frozen=True)

    webhook_url: str = Field(default="", description="Slack incoming webhook URL")
    timeout_seconds: float | None = Field(
        default=None, description="HTTP request timeout (None uses the transport default)"
    )


class PushoverConfig(BaseModel):
    """API settings for the pushover notifier."""

    model_config = ConfigDict(frozen=True)

    api_token: str = Field(default="", description="Pushover application token")
    user_key: str = Field(default="", description="Pushover user or group key")
    api_url: str = Field(default="", description="Pushover messages endpoint")
    timeout_seconds: float | None = Field(
        default=None, description="HTTP request timeout (None uses the transport default)"
    )


class AlertingConfig(BaseModel):
    """Notifier settings plus dispatch options."""

    email: EmailConfig = Field(default_factory=EmailConfig)
    slack: SlackConfig = Field(default_factory=SlackConfig)
    pushover: PushoverConfig = Field(default_factory=PushoverConfig)
    parallel: bool = Field(default=False, description="Send to notifiers concurrently")
    max_workers: int | None = Field(
        default=None, description="Worker threads for parallel dispatch"
    )


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="plain", description="Log format (json, plain)")


class Config(BaseSettings):
    """Main configuration for docker-alertd."""

    model_config = SettingsConfigDict(
        env_prefix="DOCKER_ALERTD_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    alerting: AlertingConfig = Field(default_factory=AlertingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Config:
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            return cls()

        with path.open() as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    @classmethod
    def load(cls, config_path: str | None = None) -> Config:
        """
        Load configuration with precedence:
        1. Config file (highest)
        2. DOCKER_ALERTD_* environment variables
        3. Defaults (lowest)
        """
        if config_path is None:
            config_path = os.getenv("DOCKER_ALERTD_CONFIG")

        if config_path is None:
            for candidate in [
                "docker-alertd.yaml",
                "docker-alertd.yml",
                ".docker-alertd.yaml",
            ]:
                if Path(candidate).exists():
                    config_path = candidate
                    break

        if config_path and Path(config_path).exists():
            return cls.from_yaml(config_path)

        return cls()


_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.load()
    return _config


def set_config(config: Config) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
