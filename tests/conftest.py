"""
Shared fixtures for Sentinel tests
"""

import logging
from unittest.mock import AsyncMock

import pytest

from sentinel.config.schema import SentinelConfig
from sentinel.core.engine import SuiteContext
from sentinel.core.http_client import Response

BASE_URL = "https://api.example.com"


@pytest.fixture
def make_config():
    """Factory for validated configs targeting BASE_URL."""
    def _make(**sections):
        data = {"target": {"baseUrl": BASE_URL}}
        data.update(sections)
        return SentinelConfig.model_validate(data)
    return _make


@pytest.fixture
def make_response():
    """Factory for normalized HTTP responses."""
    def _make(status=200, headers=None, path="/", text=""):
        return Response(
            status_code=status,
            headers={name.lower(): value for name, value in (headers or {}).items()},
            text=text,
            url=BASE_URL + path,
        )
    return _make


@pytest.fixture
def make_context(make_config):
    """Factory for suite contexts backed by a mocked HTTP client."""
    def _make(config=None, responses=None, endpoints=()):
        http = AsyncMock()
        if isinstance(responses, list):
            http.request.side_effect = responses
        elif responses is not None:
            http.request.return_value = responses
        return SuiteContext(
            http=http,
            config=config or make_config(),
            logger=logging.getLogger("sentinel.tests"),
            selected_endpoints=tuple(endpoints),
        )
    return _make
