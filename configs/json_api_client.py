"""JSON:API connection profiles.

This module defines the CONFIGURATION dict which maps profile names to the
settings used to build a client. Edit it, or point `load_settings()` at your
own module with the same shape.

Configuration location: configs/json_api_client.py

Example usage:
    from jsonapi_client import JsonApiClient
    from jsonapi_client.settings import load_settings

    client = JsonApiClient.from_settings(load_settings("default"))
    posts = client.with_includes(["author"]).limit(10).get("posts")

Environment overrides (applied on top of the selected profile):
    export JSONAPI_BASE_URL=https://api.example.com/v1
    export JSONAPI_TOKEN=secret
    export JSONAPI_TIMEOUT=10
    export JSONAPI_CLIENT_LOG=1

Profile inheritance:
    "staging": {
        "__inherits__": "default",   # Inherits every key from default
        "base_url": "https://staging.example.com/api/v1",
    }
"""

CONFIGURATION = {
    "default": {
        "base_url": "http://localhost:8000/api/v1",
        "token": None,
        "timeout": 30.0,
        # Emit a "JSONAPI: <METHOD> <url>" debug record per request
        "log": False,
        "verify": True,
    },
    "debug": {
        "__inherits__": "default",
        "log": True,
    },
}
