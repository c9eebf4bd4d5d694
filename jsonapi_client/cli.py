"""Fetch a JSON:API resource from the command line.

Examples:
    jsonapi-fetch posts --include author,comments --fields posts=title,body
    jsonapi-fetch posts --filter posts.status.in=draft,published --limit 10
    jsonapi-fetch posts --filter posts=published --profile debug -v
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from jsonapi_client.client import JsonApiClient
from jsonapi_client.settings import load_settings


def parse_fields(values: list[str]) -> dict[str, list[str]]:
    """Parse repeated `type=a,b` arguments into a sparse fieldset map."""
    fields: dict[str, list[str]] = {}
    for value in values:
        resource, _, field_list = value.partition("=")
        if not resource or not field_list:
            raise argparse.ArgumentTypeError(f"Expected TYPE=FIELD[,FIELD], got {value!r}")
        fields[resource] = field_list.split(",")
    return fields


def parse_filters(values: list[str]) -> dict[str, Any]:
    """Parse repeated `resource.column.operand=value` or `resource=value` arguments."""
    filters: dict[str, Any] = {}
    for value in values:
        path, sep, operand_value = value.partition("=")
        if not sep or not path:
            raise argparse.ArgumentTypeError(f"Expected KEY=VALUE filter, got {value!r}")
        parts = path.split(".")
        if len(parts) == 1:
            filters[parts[0]] = operand_value
        elif len(parts) == 3:
            resource, column, operand = parts
            columns = filters.setdefault(resource, {})
            if not isinstance(columns, dict):
                columns = filters[resource] = {}
            columns.setdefault(column, {})[operand] = operand_value
        else:
            raise argparse.ArgumentTypeError(
                f"Filter key must be RESOURCE or RESOURCE.COLUMN.OPERAND, got {path!r}"
            )
    return filters


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fetch a JSON:API resource and print the document")
    parser.add_argument("url", help="Resource path relative to the profile base URL, or absolute URL")
    parser.add_argument("--profile", default="default", help="Profile from configs/json_api_client.py")
    parser.add_argument("--include", default="", help="Comma separated relationship paths")
    parser.add_argument("--fields", action="append", default=[], help="TYPE=FIELD[,FIELD] (repeatable)")
    parser.add_argument(
        "--filter",
        action="append",
        default=[],
        dest="filters",
        help="RESOURCE.COLUMN.OPERAND=VALUE or RESOURCE=VALUE (repeatable)",
    )
    parser.add_argument("--limit", type=int, default=None, help="page[limit]")
    parser.add_argument("--offset", type=int, default=0, help="page[offset]")
    parser.add_argument("--token", default=None, help="Bearer token (overrides profile)")
    parser.add_argument("--no-throw", action="store_true", help="Print error documents instead of raising")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        fields = parse_fields(args.fields)
        filters = parse_filters(args.filters)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    client = JsonApiClient.from_settings(load_settings(args.profile))
    if args.token:
        client.token(args.token)
    if args.include:
        client.with_includes(args.include.split(","))
    if args.limit or args.offset:
        client.limit(args.limit, args.offset)

    response = (
        client.with_fields(fields).with_filters(filters).throw_exception(not args.no_throw).get(args.url)
    )
    print(json.dumps(response.document or {"body": response.text}, indent=2, ensure_ascii=False))
    return 1 if response.failed else 0


if __name__ == "__main__":
    sys.exit(main())
