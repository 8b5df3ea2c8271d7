# ABOUTME: pytest configuration and shared fixtures for onion tests
# ABOUTME: Configures timeouts per test type and provides application and log-capture fixtures

import pytest
from loguru import logger

from onion import Application, ApplicationConfig


def pytest_configure(config):
    """Configure pytest for onion tests."""
    config.addinivalue_line("markers", "unit: Unit tests with 20-second timeout")
    config.addinivalue_line("markers", "integration: Integration tests with 60-second timeout")

def pytest_collection_modifyitems(config, items):
    """Modify test items to add appropriate timeouts based on test type."""
    for item in items:
        # Check for existing timeout marker - if it exists, respect it
        if item.get_closest_marker("timeout"):
            continue

        if item.get_closest_marker("unit"):
            item.add_marker(pytest.mark.timeout(20))
        elif item.get_closest_marker("integration"):
            item.add_marker(pytest.mark.timeout(60))

@pytest.fixture
def app() -> Application:
    """Application in the development environment, so errors are reported."""
    return Application(ApplicationConfig(environment="development"))

@pytest.fixture
def log_records():
    """Capture loguru records emitted during the test."""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG", format="{message}")
    yield records
    logger.remove(handler_id)

