"""Tests for configuration module."""

from pathlib import Path

import pydantic
import pytest

from docker_alertd.config import (
    AlertingConfig,
    Config,
    EmailConfig,
    LoggingConfig,
    PushoverConfig,
    SlackConfig,
    get_config,
    set_config,
)


class TestChannelConfigs:
    """Test the per-channel settings models."""

    def test_defaults_are_empty(self):
        """Default channel settings are the omitted sentinel."""
        email = EmailConfig()
        assert email.smtp == ""
        assert email.port == 0
        assert email.to == ()
        assert email.timeout_seconds is None

        assert SlackConfig().webhook_url == ""
        assert PushoverConfig().api_url == ""

    def test_recipients_become_tuple(self):
        config = EmailConfig(to=["a@example.com", "b@example.com"])
        assert config.to == ("a@example.com", "b@example.com")

    def test_frozen(self):
        config = SlackConfig(webhook_url="https://hooks.slack.com/x")
        with pytest.raises(pydantic.ValidationError):
            config.webhook_url = "https://evil.example.com"


class TestAlertingConfig:
    """Test AlertingConfig model."""

    def test_default_values(self):
        config = AlertingConfig()
        assert config.email == EmailConfig()
        assert config.parallel is False
        assert config.max_workers is None


class TestLoggingConfig:
    """Test LoggingConfig model."""

    def test_default_values(self):
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.format == "plain"


class TestConfig:
    """Test main Config class."""

    def test_from_yaml(self, tmp_path: Path):
        path = tmp_path / "docker-alertd.yaml"
        path.write_text(
            "alerting:\n"
            "  slack:\n"
            "    webhook_url: https://hooks.slack.com/services/x\n"
            "  pushover:\n"
            "    api_token: T\n"
            "    user_key: U\n"
            "    api_url: https://api.pushover.net/1/messages.json\n"
            "  parallel: true\n"
            "logging:\n"
            "  level: DEBUG\n"
        )

        config = Config.from_yaml(path)

        assert config.alerting.slack.webhook_url == "https://hooks.slack.com/services/x"
        assert config.alerting.pushover.user_key == "U"
        assert config.alerting.email == EmailConfig()
        assert config.alerting.parallel is True
        assert config.logging.level == "DEBUG"

    def test_from_yaml_missing_file(self, tmp_path: Path):
        config = Config.from_yaml(tmp_path / "nope.yaml")
        assert config.alerting.slack.webhook_url == ""

    def test_from_yaml_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert Config.from_yaml(path).logging.format == "plain"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("DOCKER_ALERTD_ALERTING__SLACK__WEBHOOK_URL", "https://hooks/x")
        monkeypatch.setenv("DOCKER_ALERTD_LOGGING__LEVEL", "WARNING")

        config = Config()

        assert config.alerting.slack.webhook_url == "https://hooks/x"
        assert config.logging.level == "WARNING"

    def test_load_from_env_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        path = tmp_path / "custom.yaml"
        path.write_text("logging:\n  format: json\n")
        monkeypatch.setenv("DOCKER_ALERTD_CONFIG", str(path))

        assert Config.load().logging.format == "json"

    def test_load_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("DOCKER_ALERTD_CONFIG", raising=False)
        monkeypatch.chdir(tmp_path)

        config = Config.load()

        assert config.alerting == AlertingConfig()


class TestGlobalConfig:
    """Test get_config / set_config."""

    def test_set_and_get(self):
        config = Config(logging=LoggingConfig(level="ERROR"))
        set_config(config)
        try:
            assert get_config() is config
        finally:
            set_config(Config())
