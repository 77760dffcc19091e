"""Pytest configuration for Python tests."""

from __future__ import annotations

import pytest

from docker_alertd.alerting.models import Alert


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")


@pytest.fixture
def sample_alert() -> Alert:
    """A container-down alert with details and four addendums."""
    return Alert(
        message="container web-1 stopped",
        subject_addendums=["web-1", "stopped", "exit=137", "oom"],
        details={"container": "web-1", "state": "exited"},
    )


@pytest.fixture
def status_alert() -> Alert:
    """An alert whose plain-text dump is exactly "status: down"."""
    return Alert(message="status: down")
