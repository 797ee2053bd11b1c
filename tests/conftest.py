"""Pytest configuration and shared fixtures."""

import logfire
import pytest


@pytest.fixture(scope="session", autouse=True)
def configure_test_logfire():
    """Keep Logfire local during tests: no export, no console output."""
    logfire.configure(send_to_logfire=False, console=False)
