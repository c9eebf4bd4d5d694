"""JSON:API response adapter."""

from __future__ import annotations

import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)


class JsonApiRequestError(RuntimeError):
    """Raised for a non-2xx response when the client throws on errors."""

    def __init__(
        self,
        status_code: int,
        errors: list[dict[str, Any]] | None = None,
        response: requests.Response | None = None,
        detail: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.errors = errors or []
        self.response = response
        messages = _error_messages(self.errors) or ([detail] if detail else [])
        summary = "; ".join(messages)
        super().__init__(f"JSON:API request failed: {status_code}" + (f" {summary}" if summary else ""))


def _error_messages(errors: list[dict[str, Any]]) -> list[str]:
    messages = []
    for error in errors:
        if not isinstance(error, dict):
            messages.append(str(error))
            continue
        text = error.get("detail") or error.get("title") or error.get("code")
        if text:
            messages.append(str(text))
    return messages


class JsonApiResponse:
    """Wraps a raw HTTP response and exposes the JSON:API document parts.

    Call `prepare()` once after construction; it parses the body and, when
    `throw_exception` is set, raises `JsonApiRequestError` for failed
    responses. Otherwise the error state stays on the instance (`failed`,
    `errors`).
    """

    def __init__(self, response: requests.Response, throw_exception: bool = True) -> None:
        self.response = response
        self.throw_exception = throw_exception
        self.document: dict[str, Any] = {}
        self.text: str = ""

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def failed(self) -> bool:
        return not self.ok

    @property
    def data(self) -> Any:
        return self.document.get("data")

    @property
    def included(self) -> list[dict[str, Any]]:
        return self.document.get("included", [])

    @property
    def meta(self) -> dict[str, Any]:
        return self.document.get("meta", {})

    @property
    def links(self) -> dict[str, Any]:
        return self.document.get("links", {})

    @property
    def errors(self) -> list[dict[str, Any]]:
        return self.document.get("errors", [])

    def error_messages(self) -> list[str]:
        return _error_messages(self.errors)

    def prepare(self) -> JsonApiResponse:
        self.text = self.response.text or ""
        if self.text.strip():
            try:
                payload = self.response.json()
            except ValueError:
                logger.debug(f"Response body is not JSON (status {self.status_code})")
                payload = None
            if isinstance(payload, dict):
                self.document = payload

        if self.failed and self.throw_exception:
            raise JsonApiRequestError(
                self.status_code,
                errors=self.errors,
                response=self.response,
                detail=None if self.document else self.text[:200] or None,
            )
        return self

    def __repr__(self) -> str:
        return f"JsonApiResponse(status_code={self.status_code}, failed={self.failed})"
