"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest

from qiniu_stats_sdk import Credentials, StatisticsClient

BASE_URL = "https://api.qiniu.com"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: integration tests against real Qiniu API")


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(access_key="test-ak", secret_key="test-sk")


@pytest.fixture
def client(credentials: Credentials) -> Iterator[StatisticsClient]:
    with StatisticsClient(credentials=credentials) as c:
        yield c
