from __future__ import annotations

import io
import logging
from unittest.mock import Mock, patch

import pytest
import requests

from jsonapi_client.form import MultipartPart
from jsonapi_client.settings import ClientSettings
from jsonapi_client.transport import HttpTransport, RequestsTransport


class TestRequestsTransportInit:
    def test_defaults(self):
        transport = RequestsTransport()

        assert transport.base_url is None
        assert transport.timeout == 30.0
        assert transport.verify is True
        assert isinstance(transport.session, requests.Session)

    def test_is_http_transport(self):
        assert isinstance(RequestsTransport(), HttpTransport)

    def test_custom_session(self):
        session = requests.Session()

        assert RequestsTransport(session=session).session is session

    def test_no_retry_adapter_mounted(self):
        adapter = RequestsTransport().session.get_adapter("https://api.example.com")

        assert adapter.max_retries.total == 0

    def test_from_settings(self):
        settings = ClientSettings(base_url="https://api.example.com/v1/", timeout=12.5, verify=False)

        transport = RequestsTransport.from_settings(settings)

        assert transport.base_url == "https://api.example.com/v1"
        assert transport.timeout == 12.5
        assert transport.verify is False


class TestBuildUrl:
    def test_relative_path_joined_to_base(self):
        transport = RequestsTransport("https://api.example.com/v1/")

        assert transport.build_url("/posts/1") == "https://api.example.com/v1/posts/1"
        assert transport.build_url("posts") == "https://api.example.com/v1/posts"

    def test_absolute_url_untouched(self):
        transport = RequestsTransport("https://api.example.com/v1")

        assert transport.build_url("https://other.example.com/x") == "https://other.example.com/x"

    def test_no_base_url(self):
        assert RequestsTransport().build_url("posts") == "posts"


class TestSend:
    def _send(self, transport, **kwargs):
        with patch.object(transport.session, "request") as mock_request:
            mock_request.return_value = Mock(status_code=200)
            result = transport.send(
                kwargs.pop("method", "POST"),
                "posts",
                headers=kwargs.pop("headers", {}),
                query=kwargs.pop("query", {}),
                **kwargs,
            )
        return result, mock_request

    def test_query_is_bracket_encoded(self):
        transport = RequestsTransport("https://api.example.com")

        _, mock_request = self._send(
            transport,
            method="GET",
            headers={"Authorization": "Bearer abc"},
            query={"page": {"limit": 5}, "include": "author"},
        )

        mock_request.assert_called_once_with(
            "GET",
            "https://api.example.com/posts",
            headers={"Authorization": "Bearer abc"},
            params=[("page[limit]", "5"), ("include", "author")],
            timeout=30.0,
            verify=True,
        )

    def test_returns_session_response(self):
        result, mock_request = self._send(RequestsTransport())

        assert result is mock_request.return_value

    def test_json_body(self):
        _, mock_request = self._send(RequestsTransport(), json_body={"data": {"type": "posts"}})

        assert mock_request.call_args[1]["json"] == {"data": {"type": "posts"}}
        assert "data" not in mock_request.call_args[1]
        assert "files" not in mock_request.call_args[1]

    def test_form_body(self):
        _, mock_request = self._send(RequestsTransport(), form_body={"title": "Hi"})

        assert mock_request.call_args[1]["data"] == {"title": "Hi"}

    def test_empty_form_body_sends_no_data(self):
        _, mock_request = self._send(RequestsTransport(), form_body={})

        assert "data" not in mock_request.call_args[1]

    def test_multipart_parts_map_to_files(self):
        handle = io.BytesIO(b"abc")
        parts = [
            MultipartPart(name="title", contents="Cover"),
            MultipartPart(name="draft", contents=True),
            MultipartPart(name="cover", contents=handle, filename="cover.png"),
        ]

        _, mock_request = self._send(RequestsTransport(), multipart_parts=parts)

        assert mock_request.call_args[1]["files"] == [
            ("title", (None, "Cover")),
            ("draft", (None, "1")),
            ("cover", ("cover.png", handle)),
        ]

    def test_json_wins_over_form_fields(self, caplog):
        parts = [MultipartPart(name="title", contents="x")]

        with caplog.at_level(logging.WARNING, logger="jsonapi_client.transport"):
            _, mock_request = self._send(
                RequestsTransport(), json_body={"a": 1}, multipart_parts=parts
            )

        kwargs = mock_request.call_args[1]
        assert kwargs["json"] == {"a": 1}
        assert "files" not in kwargs
        assert "form fields are not sent" in caplog.text

    def test_session_errors_propagate(self):
        transport = RequestsTransport()

        with (
            patch.object(
                transport.session, "request", side_effect=requests.exceptions.ConnectionError("down")
            ),
            pytest.raises(requests.exceptions.ConnectionError),
        ):
            transport.send("GET", "posts", headers={}, query={})
