"""
Pytest configuration and fixtures for Blackstar client tests.

Provides sample chunks, a mocked HTTP session and environment cleanup.
"""

import json
import os
from unittest.mock import Mock
import pytest
import requests
from requests.cookies import RequestsCookieJar

from blackstar_client.domain.models import Chunk


SAMPLE_CHUNKS_JSON = [
    {"id": 6, "tags": ["index-page"], "name": "index-heading", "value": "This is the page heading"},
    {"id": 7, "tags": ["index-page"], "name": "index-title", "value": "This is a title"},
    {"id": 8, "tags": ["index-page"], "name": "index-content", "value": "<p>The <b>Seebeck effect</b> is the conversion of "},
    {"id": 9, "tags": ["index-page"], "name": "index-footer", "value": "This is a footer"},
]


@pytest.fixture
def sample_chunks_json():
    """Raw chunk list as returned by the content API."""
    return [dict(c) for c in SAMPLE_CHUNKS_JSON]


@pytest.fixture
def sample_chunks(sample_chunks_json):
    """Decoded sample chunks (ids 6..9, all tagged index-page)."""
    return [Chunk.from_dict(c) for c in sample_chunks_json]


def make_response(status_code=200, json_data=None, url="http://localhost:2999/api/content"):
    """Build a real requests.Response carrying a JSON body."""
    r = requests.Response()
    r.status_code = status_code
    r.url = url
    r._content = b"" if json_data is None else json.dumps(json_data).encode("utf-8")
    r.headers["Content-Type"] = "application/json"
    return r


@pytest.fixture
def response_factory():
    return make_response


@pytest.fixture
def mock_session(response_factory):
    """Mock requests.Session whose request() returns an empty JSON list by default."""
    session = Mock(spec=requests.Session)
    session.cookies = RequestsCookieJar()
    session.request.return_value = response_factory(200, [])
    return session


@pytest.fixture
def mock_store():
    """Mock content store for use-case tests."""
    mock = Mock()
    mock.fetch_chunks.return_value = []
    mock.fetch_json.return_value = []
    return mock


@pytest.fixture
def clean_environment():
    """Clean BLACKSTAR_* environment variables for testing."""
    env_vars_to_clean = [
        'BLACKSTAR_URL',
        'BLACKSTAR_TOKEN',
        'BLACKSTAR_SHOW_EDIT_CONTROLS',
        'BLACKSTAR_HTTP_TIMEOUT',
        'BLACKSTAR_LOG_LEVEL',
    ]

    original_env = {}
    for var in env_vars_to_clean:
        if var in os.environ:
            original_env[var] = os.environ[var]
            del os.environ[var]

    yield

    for var in env_vars_to_clean:
        os.environ.pop(var, None)
    for var, value in original_env.items():
        os.environ[var] = value


@pytest.fixture
def sample_dotenv_content():
    """Sample .env file content for testing."""
    return """
# Blackstar client configuration
BLACKSTAR_URL=http://cms.example.test
BLACKSTAR_TOKEN="abc123"
BLACKSTAR_SHOW_EDIT_CONTROLS=yes

# Other variables
OTHER_VAR=should_be_ignored
"""


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )
    config.addinivalue_line(
        "markers", "cli: mark test as CLI command test"
    )
    config.addinivalue_line(
        "markers", "env: mark test as environment resolution test"
    )
