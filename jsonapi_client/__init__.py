"""Fluent client for JSON:API style REST endpoints.

This package provides:
- A request builder for includes, sparse fieldsets, filters and pagination
- Bearer token headers and form, multipart or JSON bodies
- A requests-based transport and a JSON:API response adapter
"""

from jsonapi_client.client import JsonApiClient
from jsonapi_client.form import FileRef
from jsonapi_client.response import JsonApiRequestError, JsonApiResponse
from jsonapi_client.transport import HttpTransport, RequestsTransport

__all__ = [
    "JsonApiClient",
    "FileRef",
    "HttpTransport",
    "RequestsTransport",
    "JsonApiResponse",
    "JsonApiRequestError",
]
