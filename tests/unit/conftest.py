"""Shared fixtures for client tests"""

import pytest

from elastic_http.config import ElasticConfig

from fakes import FakeTransport


@pytest.fixture
def config() -> ElasticConfig:
    return ElasticConfig()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()
