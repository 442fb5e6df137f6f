# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and configuration for Bubble Data API client tests.

Provides a fake ``requests.Response`` and a stub HTTP layer that replays
queued responses and records every request it receives.
"""

import json

import pytest

from bubble_data.core._auth import _AuthManager
from bubble_data.core.config import BubbleConfig
from bubble_data.data._data_api import _DataApiClient


class FakeResponse:
    """Minimal stand-in for :class:`requests.Response`."""

    def __init__(self, status_code=200, body=None, text=None, headers=None, reason=None, url=None):
        self.status_code = status_code
        self.headers = headers or {}
        self.reason = reason if reason is not None else ("OK" if status_code < 400 else "Error")
        self.url = url
        self._body = body
        if text is not None:
            self.text = text
        elif body is not None:
            self.text = json.dumps(body)
        else:
            self.text = ""
        self.content = self.text.encode("utf-8")

    def json(self):
        if self._body is None:
            return json.loads(self.text)
        return self._body


class StubHTTP:
    """Replays queued responses in order and records each call."""

    def __init__(self, responses=None):
        self._responses = list(responses or [])
        self.calls = []

    def queue(self, *responses):
        self._responses.extend(responses)

    def _request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self._responses:
            raise AssertionError("No more responses")
        r = self._responses.pop(0)
        if r.url is None:
            r.url = url
        return r

    def close(self):
        pass


def list_response(results, remaining=0, cursor=0):
    return FakeResponse(
        200,
        {"response": {"cursor": cursor, "results": results, "count": len(results), "remaining": remaining}},
    )


@pytest.fixture
def make_response():
    """Factory for fake HTTP responses."""
    return FakeResponse


@pytest.fixture
def make_list_response():
    """Factory for enveloped list responses."""
    return list_response


@pytest.fixture
def sample_base_url():
    """Standard test base URL."""
    return "https://yourapp.bubbleapps.io/api/1.1"


@pytest.fixture
def sample_api_key():
    return "test_api_key_12345"


@pytest.fixture
def test_config():
    """Test configuration with safe defaults."""
    return BubbleConfig(http_timeout=5)


@pytest.fixture
def stub_http():
    return StubHTTP()


@pytest.fixture
def api_client(sample_base_url, sample_api_key, test_config, stub_http):
    """Low-level client wired to the stub HTTP layer."""
    client = _DataApiClient(_AuthManager(sample_api_key), sample_base_url, test_config)
    client._http = stub_http
    return client


@pytest.fixture
def sample_articles():
    return [
        {"_id": "1695394848000x100", "title": "Article 1", "body": "First"},
        {"_id": "1695394848000x101", "title": "Article 2", "body": "Second"},
        {"_id": "1695394848000x102", "title": "Article 3", "body": "Third"},
    ]
