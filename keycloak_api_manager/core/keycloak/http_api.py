"""Direct HTTP calls to the Keycloak Admin API.

Every handler operation ends up here. The helper is also called explicitly
for endpoints that only exist as raw REST resources (client policies,
users-management permissions).
"""
from __future__ import annotations
import json
from typing import Any, Dict, Mapping, Optional

import requests

from .exceptions import KeycloakAPIError

REQUEST_TIMEOUT = 30


def _parse_body(text: str) -> Any:
    return json.loads(text) if text else None


def parse_error_body(text: str) -> Any:
    """Decode an error body, falling back to {"message": text}."""
    try:
        payload = json.loads(text) if text else {}
    except ValueError:
        return {"message": text}
    if not isinstance(payload, dict):
        return {"message": text}
    return payload


def _error_message(payload: Dict[str, Any], status_code: int) -> str:
    for key in ("error_description", "errorMessage", "message", "error"):
        value = payload.get(key)
        if value:
            return str(value)
    return f"HTTP {status_code}"


def build_url(base_url: str, path: str) -> str:
    """Join the server root and an absolute API path."""
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{base_url.rstrip('/')}{path}"


def make_request(
    base_url: str,
    token: Optional[str],
    method: str,
    path: str,
    body: Any = None,
    params: Optional[Mapping[str, Any]] = None,
    request_options: Optional[Mapping[str, Any]] = None,
    content_type: Optional[str] = None,
    raw: bool = False,
) -> Any:
    """Make a direct HTTP request to the Keycloak API.

    Args:
        base_url: Keycloak root URL (e.g., http://keycloak:8080)
        token: Bearer token
        method: HTTP method (GET, POST, PUT, DELETE)
        path: API path (e.g., /admin/realms/demo/clients/<id>)
        body: Request body; JSON-encoded unless content_type says otherwise
        params: Query parameters
        request_options: Extra keyword arguments for requests (timeout, verify, proxies...)
        content_type: Override the body content type (e.g., text/plain)
        raw: Return the response bytes instead of parsed JSON

    Returns:
        Parsed JSON body, or None when the body is empty

    Raises:
        KeycloakAPIError: On any non-2xx response
        requests.RequestException: On transport failure
    """
    url = build_url(base_url, path)
    headers = {
        "Accept": "application/json",
        "Authorization": f"Bearer {token}",
    }

    data = None
    if body is not None:
        if content_type and content_type != "application/json":
            headers["Content-Type"] = content_type
            data = body if isinstance(body, (bytes, str)) else str(body)
        else:
            headers["Content-Type"] = "application/json"
            data = json.dumps(body)

    options: Dict[str, Any] = {"timeout": REQUEST_TIMEOUT}
    options.update(request_options or {})
    extra_headers = options.pop("headers", None) or {}
    headers = {**extra_headers, **headers}

    query = {key: value for key, value in (params or {}).items() if value is not None}

    resp = requests.request(
        method.upper(),
        url,
        params=query or None,
        data=data,
        headers=headers,
        **options,
    )

    if 200 <= resp.status_code < 300:
        if raw:
            return resp.content
        return _parse_body(resp.text)

    payload = parse_error_body(resp.text)
    raise KeycloakAPIError(resp.status_code, _error_message(payload, resp.status_code), url, payload)
