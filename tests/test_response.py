from __future__ import annotations

import pytest

from jsonapi_client.response import JsonApiRequestError, JsonApiResponse


class TestJsonApiResponse:
    def test_prepare_parses_document(self, raw_response, sample_posts_document):
        response = JsonApiResponse(raw_response(200, sample_posts_document)).prepare()

        assert response.ok
        assert not response.failed
        assert response.status_code == 200
        assert response.data[0]["attributes"]["title"] == "Hello"
        assert response.included == sample_posts_document["included"]
        assert response.meta == {"total": 1}
        assert response.links["self"].endswith("/posts")
        assert response.errors == []

    def test_prepare_returns_self(self, raw_response):
        response = JsonApiResponse(raw_response(200, {"data": None}))

        assert response.prepare() is response

    def test_empty_body(self, raw_response):
        response = JsonApiResponse(raw_response(204)).prepare()

        assert response.ok
        assert response.document == {}
        assert response.data is None

    def test_non_json_success_body_kept_as_text(self, raw_response):
        response = JsonApiResponse(raw_response(200, text="<html>ok</html>")).prepare()

        assert response.document == {}
        assert response.text == "<html>ok</html>"

    def test_failure_raises_when_throwing(self, raw_response, sample_error_document):
        with pytest.raises(JsonApiRequestError) as exc_info:
            JsonApiResponse(raw_response(422, sample_error_document), True).prepare()

        error = exc_info.value
        assert error.status_code == 422
        assert error.errors == sample_error_document["errors"]
        assert "Title must not be empty." in str(error)
        assert error.response is not None

    def test_failure_with_plain_text_body(self, raw_response):
        with pytest.raises(JsonApiRequestError, match="500 Internal Server Error"):
            JsonApiResponse(raw_response(500, text="Internal Server Error")).prepare()

    def test_failure_returned_when_not_throwing(self, raw_response, sample_error_document):
        response = JsonApiResponse(raw_response(404, sample_error_document), False).prepare()

        assert response.failed
        assert response.status_code == 404
        assert response.error_messages() == ["Title must not be empty."]

    def test_error_messages_fall_back_to_title_and_code(self, raw_response):
        document = {"errors": [{"title": "Forbidden"}, {"code": "E42"}, {"status": "400"}]}

        response = JsonApiResponse(raw_response(400, document), False).prepare()

        assert response.error_messages() == ["Forbidden", "E42"]

    def test_repr(self, raw_response):
        response = JsonApiResponse(raw_response(201, {"data": {}})).prepare()

        assert repr(response) == "JsonApiResponse(status_code=201, failed=False)"


class TestJsonApiRequestError:
    def test_message_without_details(self):
        assert str(JsonApiRequestError(503)) == "JSON:API request failed: 503"

    def test_is_runtime_error(self):
        assert isinstance(JsonApiRequestError(400), RuntimeError)
