from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from jsonapi_client.form import open_multipart
from jsonapi_client.query import RequestSpec, build_query
from jsonapi_client.response import JsonApiResponse
from jsonapi_client.settings import ClientSettings
from jsonapi_client.transport import HttpTransport, RequestsTransport

logger = logging.getLogger(__name__)

ResponseFactory = Callable[[Any, bool], Any]


class JsonApiClient:
    """Fluent request builder for JSON:API endpoints.

    Use one instance per request: chain the configuration calls, then finish
    with a verb.

    Examples:
        >>> client = JsonApiClient(RequestsTransport("https://api.example.com/v1"), token="secret")
        >>> posts = (
        ...     client.with_includes(["author"])
        ...     .with_filters({"posts": {"status": {"in": ["draft", "published"]}}})
        ...     .limit(10, 20)
        ...     .get("posts")
        ... )
    """

    def __init__(
        self,
        transport: HttpTransport,
        token: str | None = None,
        *,
        response_factory: ResponseFactory = JsonApiResponse,
        log_requests: bool = False,
    ) -> None:
        self.transport = transport
        self.response_factory = response_factory
        self.log_requests = log_requests
        self.spec = RequestSpec(auth_token=token)

    @classmethod
    def from_settings(
        cls, settings: ClientSettings, transport: HttpTransport | None = None
    ) -> JsonApiClient:
        return cls(
            transport or RequestsTransport.from_settings(settings),
            token=settings.token,
            log_requests=settings.log,
        )

    def with_includes(self, includes: Sequence[str]) -> JsonApiClient:
        self.spec.includes = list(includes)
        return self

    def with_fields(self, fields: Mapping[str, Sequence[str]]) -> JsonApiClient:
        self.spec.fields = dict(fields)
        return self

    def with_filters(self, filters: Mapping[str, Any]) -> JsonApiClient:
        self.spec.filters = dict(filters)
        return self

    def with_query(self, query: Mapping[str, Any]) -> JsonApiClient:
        self.spec.query = dict(query)
        return self

    def limit(self, limit: int | None, offset: int | None = 0) -> JsonApiClient:
        self.spec.limit = limit
        self.spec.offset = offset
        return self

    def token(self, token: str | None) -> JsonApiClient:
        self.spec.auth_token = token
        return self

    def throw_exception(self, status: bool = True) -> JsonApiClient:
        self.spec.throw_exception = status
        return self

    def form_data(self, data: Mapping[str, Any]) -> JsonApiClient:
        """Set body fields; any `FileRef` value switches the body to multipart."""
        self.spec.form_data = dict(data)
        return self

    def json_data(self, data: Any) -> JsonApiClient:
        self.spec.json_data = data
        return self

    def build_query(self) -> dict[str, Any]:
        return build_query(self.spec)

    def headers(self) -> dict[str, str]:
        if self.spec.auth_token:
            return {"Authorization": f"Bearer {self.spec.auth_token}"}
        return {}

    def request(self, method: str, url: str) -> Any:
        """Send the request and return the prepared response adapter.

        Transport errors and errors raised by the adapter propagate unchanged.
        """
        options: dict[str, Any] = {
            "headers": self.headers(),
            "query": self.build_query(),
        }
        if self.spec.json_data is not None:
            options["json_body"] = self.spec.json_data

        if self.spec.body_mode == "multipart":
            with open_multipart(self.spec.form_data) as parts:
                raw = self.transport.send(method, url, multipart_parts=parts, **options)
        else:
            raw = self.transport.send(method, url, form_body=self.spec.form_data, **options)

        if self.log_requests:
            logger.debug(f"JSONAPI: {method} {url}")

        response = self.response_factory(raw, self.spec.throw_exception)
        response.prepare()
        return response

    def get(self, url: str) -> Any:
        return self.request("GET", url)

    def post(self, url: str) -> Any:
        return self.request("POST", url)

    def patch(self, url: str) -> Any:
        return self.request("PATCH", url)

    def delete(self, url: str) -> Any:
        return self.request("DELETE", url)
