# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from unittest.mock import MagicMock, Mock, patch

import pytest
import requests

from bubble_data.core._http import _HttpClient


class TestHttpClient:
    """Timeouts, optional retries and session reuse in _HttpClient."""

    def test_default_configuration(self):
        client = _HttpClient()
        assert client.max_attempts == 1
        assert client.base_delay == 0.5
        assert client.default_timeout is None

    def test_retries_floor_at_one_attempt(self):
        assert _HttpClient(retries=0).max_attempts == 1

    @patch("requests.request")
    def test_per_method_default_timeouts(self, mock_request):
        mock_request.return_value = Mock(status_code=200)
        client = _HttpClient()
        client._request("get", "https://example.com")
        assert mock_request.call_args.kwargs["timeout"] == 10
        client._request("post", "https://example.com")
        assert mock_request.call_args.kwargs["timeout"] == 120

    @patch("requests.request")
    def test_configured_timeout_wins(self, mock_request):
        mock_request.return_value = Mock(status_code=200)
        _HttpClient(timeout=3)._request("post", "https://example.com")
        assert mock_request.call_args.kwargs["timeout"] == 3

    @patch("requests.request")
    def test_status_codes_are_not_retried(self, mock_request):
        mock_request.return_value = Mock(status_code=503)
        response = _HttpClient(retries=3)._request("get", "https://example.com")
        assert response.status_code == 503
        assert mock_request.call_count == 1

    @patch("requests.request")
    def test_network_error_raises_without_retry_by_default(self, mock_request):
        mock_request.side_effect = requests.exceptions.ConnectionError("down")
        with pytest.raises(requests.exceptions.ConnectionError):
            _HttpClient()._request("get", "https://example.com")
        assert mock_request.call_count == 1

    @patch("time.sleep")
    @patch("requests.request")
    def test_network_error_retried_with_backoff_when_configured(self, mock_request, mock_sleep):
        ok = Mock(status_code=200)
        mock_request.side_effect = [
            requests.exceptions.ConnectionError("down"),
            requests.exceptions.Timeout("slow"),
            ok,
        ]
        response = _HttpClient(retries=3, backoff=0.5)._request("get", "https://example.com")
        assert response is ok
        assert [c.args[0] for c in mock_sleep.call_args_list] == [0.5, 1.0]

    def test_session_used_when_provided(self):
        session = MagicMock(spec=requests.Session)
        session.request.return_value = Mock(status_code=200)
        client = _HttpClient(session=session)
        with patch("requests.request") as mock_request:
            client._request("get", "https://example.com")
            mock_request.assert_not_called()
        session.request.assert_called_once()

    def test_close_closes_session_once(self):
        session = MagicMock(spec=requests.Session)
        client = _HttpClient(session=session)
        client.close()
        client.close()
        session.close.assert_called_once()
