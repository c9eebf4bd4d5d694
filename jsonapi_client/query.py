"""Request state and JSON:API query-string serialization."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from jsonapi_client.form import has_files


@dataclass
class RequestSpec:
    """Accumulated options for a single outbound request."""

    includes: list[str] = field(default_factory=list)
    fields: dict[str, list[str]] = field(default_factory=dict)
    filters: dict[str, Any] = field(default_factory=dict)
    query: dict[str, Any] = field(default_factory=dict)
    limit: int | None = None
    offset: int | None = None
    auth_token: str | None = None
    form_data: dict[str, Any] | None = None
    json_data: Any = None
    throw_exception: bool = True

    @property
    def body_mode(self) -> str:
        if self.form_data and has_files(self.form_data):
            return "multipart"
        if self.json_data is not None:
            return "json"
        if self.form_data:
            return "form"
        return "none"


def _join(values: Any) -> str:
    return ",".join(str(v) for v in values)


def _group(query: dict[str, Any], key: str) -> dict[str, Any]:
    # Copy nested groups coming from the free-form query instead of writing into them
    existing = query.get(key)
    group = dict(existing) if isinstance(existing, Mapping) else {}
    query[key] = group
    return group


def _assign(query: dict[str, Any], path: tuple[str, ...], value: Any) -> None:
    group = query
    for key in path[:-1]:
        group = _group(group, key)
    group[path[-1]] = value


def build_query(spec: RequestSpec) -> dict[str, Any]:
    """Serialize `spec` into the nested JSON:API query structure.

    Later steps override earlier ones: free-form query, then ``page``,
    ``filter``, ``fields`` and finally ``include``.

    Pagination keys are only emitted when truthy, so ``offset=0`` is left out.
    When either is set the whole ``page`` group of the free-form query is
    replaced.

    Examples:
        >>> spec = RequestSpec(includes=["author", "comments"], limit=5)
        >>> build_query(spec)
        {'page': {'limit': 5}, 'include': 'author,comments'}
    """
    query = dict(spec.query)

    if spec.limit or spec.offset:
        page = query["page"] = {}
        if spec.limit:
            page["limit"] = spec.limit
        if spec.offset:
            page["offset"] = spec.offset

    for resource, columns in spec.filters.items():
        if isinstance(columns, (list, tuple)):
            # Lists are column groups keyed by position
            columns = dict(enumerate(columns))
        if not isinstance(columns, Mapping):
            _assign(query, ("filter", resource), columns)
            continue
        for column, operands in columns.items():
            if not isinstance(operands, Mapping):
                continue
            for operand, value in operands.items():
                if isinstance(value, Mapping):
                    value = _join(value.values())
                elif isinstance(value, (list, tuple)):
                    value = _join(value)
                _assign(query, ("filter", resource, column, operand), value)

    for resource, field_list in spec.fields.items():
        _assign(query, ("fields", resource), _join(field_list))

    if spec.includes:
        query["include"] = _join(spec.includes)

    return query


def format_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def encode_query(query: Mapping[str, Any], prefix: str | None = None) -> list[tuple[str, str]]:
    """Flatten a nested query into bracket-notation key/value pairs.

    Mirrors PHP's ``http_build_query``: ``None`` is skipped, booleans become
    ``1``/``0`` and list items are keyed by index.

    Examples:
        >>> encode_query({"filter": {"posts": {"title": {"in": "a,b"}}}})
        [('filter[posts][title][in]', 'a,b')]
        >>> encode_query({"ids": [3, 4]})
        [('ids[0]', '3'), ('ids[1]', '4')]
    """
    pairs: list[tuple[str, str]] = []
    for key, value in query.items():
        name = f"{prefix}[{key}]" if prefix is not None else str(key)
        if value is None:
            continue
        if isinstance(value, Mapping):
            pairs.extend(encode_query(value, name))
        elif isinstance(value, (list, tuple)):
            pairs.extend(encode_query(dict(enumerate(value)), name))
        else:
            pairs.append((name, format_scalar(value)))
    return pairs
