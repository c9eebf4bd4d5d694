from __future__ import annotations

import json
from unittest.mock import Mock

import pytest

from jsonapi_client.transport import HttpTransport

ENV_KEYS = [
    "JSONAPI_BASE_URL",
    "JSONAPI_TOKEN",
    "JSONAPI_TIMEOUT",
    "JSONAPI_CLIENT_LOG",
    "QUOTED_VALUE",
    "SINGLE_QUOTED",
    "TEST_KEY",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove client environment overrides so profiles are used as written.

    Keys are registered with setenv first so values written by .env loading
    are removed again on teardown.
    """
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    yield


def make_raw_response(status_code: int = 200, payload=None, text: str | None = None) -> Mock:
    response = Mock()
    response.status_code = status_code
    if text is None:
        text = json.dumps(payload) if payload is not None else ""
    response.text = text
    if payload is not None:
        response.json.return_value = payload
    else:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    return response


@pytest.fixture
def sample_posts_document():
    """A JSON:API document with one post and its author included."""
    return {
        "data": [
            {
                "type": "posts",
                "id": "1",
                "attributes": {"title": "Hello", "status": "published"},
                "relationships": {"author": {"data": {"type": "people", "id": "9"}}},
            }
        ],
        "included": [{"type": "people", "id": "9", "attributes": {"name": "Dan"}}],
        "meta": {"total": 1},
        "links": {"self": "http://localhost:8000/api/v1/posts"},
    }


@pytest.fixture
def sample_error_document():
    return {
        "errors": [
            {"status": "422", "title": "Invalid Attribute", "detail": "Title must not be empty."}
        ]
    }


@pytest.fixture
def transport(sample_posts_document):
    """Mock transport returning a successful posts document."""
    mock_transport = Mock(spec=HttpTransport)
    mock_transport.send.return_value = make_raw_response(200, sample_posts_document)
    return mock_transport


@pytest.fixture
def raw_response():
    """Factory for mocked requests.Response objects."""
    return make_raw_response
