"""Pytest configuration and shared fixtures."""

import pytest

# Load environment variables from .env file at test startup
# so ROSETTA_* settings are visible to Configuration.from_env()
from dotenv import load_dotenv
load_dotenv()

from rosetta_client import Configuration

pytest_plugins = [
    "tests.fixtures.server",
]


@pytest.fixture
def configuration() -> Configuration:
    """Provide a configuration pointing at an unroutable test host.

    Tests using a MockTransport never open a socket, so the URL is only
    used to build request URLs and error messages.
    """
    return Configuration(base_url="http://rosetta.test", user_agent="rosetta-client-tests")
