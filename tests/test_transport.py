"""
Unit tests for the requests-backed transport.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from llm_session.core.errors import TransportFailure
from llm_session.sdk.transport import RequestsTransport, TransportResponse


class TestRequestsTransport:
    """Test RequestsTransport behaviour."""

    @patch('llm_session.sdk.transport.requests.post')
    def test_post_returns_status_and_body(self, mock_post):
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.text = '{"ok": true}'
        mock_post.return_value = mock_response

        transport = RequestsTransport(timeout=5)
        result = transport.post("https://example.test/chat", '{"a": 1}', {"X": "y"})

        assert result == TransportResponse(status_code=200, body='{"ok": true}')
        mock_post.assert_called_once_with(
            "https://example.test/chat",
            data=b'{"a": 1}',
            headers={"X": "y"},
            timeout=5,
        )

    @patch('llm_session.sdk.transport.requests.post')
    def test_error_status_is_not_raised(self, mock_post):
        """Verify non-200 responses are returned for the adapter to judge."""
        mock_response = MagicMock()
        mock_response.status_code = 401
        mock_response.text = "unauthorized"
        mock_post.return_value = mock_response

        result = RequestsTransport().post("https://example.test", "{}", {})
        assert result.status_code == 401
        assert result.body == "unauthorized"

    @patch('llm_session.sdk.transport.requests.post')
    def test_connection_error_becomes_transport_failure(self, mock_post):
        mock_post.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(TransportFailure, match="refused") as excinfo:
            RequestsTransport().post("https://example.test", "{}", {})
        assert isinstance(excinfo.value.__cause__, requests.exceptions.ConnectionError)

    @patch('llm_session.sdk.transport.requests.post')
    def test_timeout_becomes_transport_failure(self, mock_post):
        mock_post.side_effect = requests.exceptions.Timeout("too slow")

        with pytest.raises(TransportFailure):
            RequestsTransport(timeout=0.1).post("https://example.test", "{}", {})

    def test_default_timeout(self):
        assert RequestsTransport().timeout == 120
