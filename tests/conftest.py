"""Shared test configuration."""

import pytest

from hal_resource.cli import configure_logging


@pytest.fixture(autouse=True, scope="session")
def quiet_logging() -> None:
    """Keep structlog output out of captured stdout."""
    configure_logging("critical")
