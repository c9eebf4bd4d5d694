"""HTTP transports used by JsonApiClient to put requests on the wire."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import requests

from jsonapi_client.form import MultipartPart
from jsonapi_client.query import encode_query, format_scalar

if TYPE_CHECKING:
    from jsonapi_client.settings import ClientSettings

logger = logging.getLogger(__name__)


class HttpTransport(ABC):
    """Abstract base class for the component that performs HTTP calls.

    Transports own connection handling, TLS and timeouts. Errors they raise
    propagate to the caller of JsonApiClient unchanged.
    """

    @abstractmethod
    def send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        query: dict[str, Any],
        json_body: Any = None,
        form_body: dict[str, Any] | None = None,
        multipart_parts: list[MultipartPart] | None = None,
    ) -> Any:
        """Perform one request.

        Args:
            method: HTTP verb ("GET", "POST", ...)
            url: Absolute URL or a path relative to the transport's base URL
            headers: Request headers
            query: Nested JSON:API query structure (see `build_query`)
            json_body: Payload to send as application/json
            form_body: Fields to send URL-encoded
            multipart_parts: Parts to send as multipart/form-data

        Returns:
            The raw response object
        """
        pass


class RequestsTransport(HttpTransport):
    """Transport backed by a `requests.Session`.

    Examples:
        >>> transport = RequestsTransport("https://api.example.com/v1")
        >>> transport.build_url("posts")
        'https://api.example.com/v1/posts'
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 30.0,
        session: requests.Session | None = None,
        verify: bool = True,
    ) -> None:
        self.base_url = base_url.rstrip("/") if base_url else None
        self.timeout = timeout
        self.session = session or requests.Session()
        self.verify = verify

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> RequestsTransport:
        return cls(base_url=settings.base_url, timeout=settings.timeout, verify=settings.verify)

    def build_url(self, url: str) -> str:
        if not self.base_url or url.startswith(("http://", "https://")):
            return url
        return f"{self.base_url}/{url.lstrip('/')}"

    def send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        query: dict[str, Any],
        json_body: Any = None,
        form_body: dict[str, Any] | None = None,
        multipart_parts: list[MultipartPart] | None = None,
    ) -> requests.Response:
        kwargs: dict[str, Any] = {
            "headers": headers,
            "params": encode_query(query),
            "timeout": self.timeout,
            "verify": self.verify,
        }

        if json_body is not None:
            # JSON wins over form fields on the wire
            if form_body or multipart_parts:
                logger.warning(f"{method} {url}: JSON body set, form fields are not sent")
            kwargs["json"] = json_body
        elif multipart_parts:
            kwargs["files"] = [_file_tuple(part) for part in multipart_parts]
        elif form_body:
            kwargs["data"] = form_body

        return self.session.request(method, self.build_url(url), **kwargs)


def _file_tuple(part: MultipartPart) -> tuple[str, tuple[str | None, Any]]:
    # requests sends a part without filename as a plain form field
    if part.filename is None:
        return part.name, (None, format_scalar(part.contents))
    return part.name, (part.filename, part.contents)
