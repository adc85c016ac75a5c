"""Declarative endpoint table shared by every resource handler.

A handler declares its operations as class attributes:

    class GroupHandler(ResourceHandler):
        base_path = "/admin/realms/{realm}/groups"

        find = Endpoint("GET", "")
        find_one = Endpoint("GET", "/{id}", not_found=True)
        update = Endpoint("PUT", "/{id}")

and callers use them as methods:

    groups.find_one({"id": group_id})
    groups.update({"id": group_id}, {"name": "renamed"})

Path placeholders are taken out of the params mapping (``{realm}`` falls back
to the session realm); leftover params become the query string.
"""
from __future__ import annotations
import string
from typing import Any, Callable, Dict, Mapping, Optional, Tuple
from urllib.parse import quote

from .client import KeycloakClient
from .exceptions import KeycloakAPIError, KeycloakConfigError, KeycloakNotConfiguredError

_FORMATTER = string.Formatter()


def normalize_count(value: Any) -> int:
    """Coerce a count response (bare number or {"count": n}) to an int; 0 otherwise."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, Mapping):
        count = value.get("count")
        if isinstance(count, (int, float)) and not isinstance(count, bool):
            return int(count)
    return 0


def path_fields(template: str) -> Tuple[str, ...]:
    return tuple(name for _, name, _, _ in _FORMATTER.parse(template) if name)


class Endpoint:
    """One REST operation: method, path template and how params map onto the request.

    Args:
        method: HTTP method
        path: Template relative to the handler's base_path, or absolute when it starts with /admin
        payload_key: Param moved into the request body (e.g., "roles")
        body_keys: Params gathered into a JSON object body (e.g., ("newName",))
        not_found: Return None instead of raising on 404
        transform: Post-processing of the decoded response
        content_type: Body content type when not JSON (e.g., text/plain)
        raw: Return response bytes
        unquoted: Path params inserted without URL-quoting (e.g., group paths)
    """

    def __init__(
        self,
        method: str,
        path: str,
        payload_key: Optional[str] = None,
        body_keys: Tuple[str, ...] = (),
        not_found: bool = False,
        transform: Optional[Callable[[Any], Any]] = None,
        content_type: Optional[str] = None,
        raw: bool = False,
        unquoted: Tuple[str, ...] = (),
    ):
        self.method = method.upper()
        self.path = path
        self.payload_key = payload_key
        self.body_keys = body_keys
        self.not_found = not_found
        self.transform = transform
        self.content_type = content_type
        self.raw = raw
        self.unquoted = unquoted
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, handler: Optional["ResourceHandler"], owner: type) -> Any:
        if handler is None:
            return self

        def operation(params: Optional[Mapping[str, Any]] = None, payload: Any = None) -> Any:
            return self.call(handler, params, payload)

        operation.__name__ = self.name
        operation.__doc__ = f"{self.method} {self.path or '/'}"
        return operation

    def template(self, handler: "ResourceHandler") -> str:
        if self.path.startswith("/admin"):
            return self.path
        return f"{handler.base_path}{self.path}"

    def resolve(self, handler: "ResourceHandler", params: Optional[Mapping[str, Any]], payload: Any) -> Tuple[str, Dict[str, Any], Any]:
        """Split caller params into (path, query, body) without mutating them."""
        client = handler.client
        remaining = {key: value for key, value in (params or {}).items() if value is not None}
        template = self.template(handler)

        values: Dict[str, str] = {}
        for name in path_fields(template):
            value = remaining.pop(name, None)
            if value is None and name == "realm":
                value = client.realm_name
            if value is None or value == "":
                raise KeycloakConfigError(f"{handler.resource}.{self.name}: missing required parameter '{name}'")
            if name in self.unquoted:
                values[name] = quote(str(value).strip("/"), safe="/")
            else:
                values[name] = quote(str(value), safe="")
        path = template.format(**values)
        # realm is path context only, never a query parameter
        remaining.pop("realm", None)

        body = payload
        if self.payload_key is not None and body is None:
            body = remaining.pop(self.payload_key, None)
        if self.body_keys:
            extra = {key: remaining.pop(key) for key in self.body_keys if key in remaining}
            if body is None:
                body = extra
            elif isinstance(body, Mapping):
                body = {**extra, **body}
        if self.payload_key is not None:
            remaining.pop(self.payload_key, None)
        return path, remaining, body

    def call(self, handler: "ResourceHandler", params: Optional[Mapping[str, Any]] = None, payload: Any = None) -> Any:
        path, query, body = self.resolve(handler, params, payload)
        try:
            result = handler.client.request(
                self.method,
                path,
                body=body,
                params=query,
                content_type=self.content_type,
                raw=self.raw,
            )
        except KeycloakAPIError as exc:
            if self.not_found and exc.status_code == 404:
                return None
            raise
        if self.transform is not None:
            return self.transform(result)
        return result


class ResourceHandler:
    """Namespace of operations for one resource family, bound to the live session."""

    resource = ""
    base_path = ""

    def __init__(self, client: Optional[KeycloakClient] = None):
        self._client = client

    def set_client(self, client: Optional[KeycloakClient]) -> None:
        """Bind the handler to the shared session (the object itself, never a copy)."""
        self._client = client

    @property
    def client(self) -> KeycloakClient:
        if self._client is None:
            raise KeycloakNotConfiguredError()
        return self._client

    @property
    def realm_name(self) -> str:
        return self.client.realm_name

    def realm_of(self, params: Optional[Mapping[str, Any]]) -> str:
        return (params or {}).get("realm") or self.realm_name

    @classmethod
    def operations(cls) -> Dict[str, Endpoint]:
        """All declared endpoints, including inherited mixin ones."""
        found: Dict[str, Endpoint] = {}
        for klass in reversed(cls.__mro__):
            for name, value in vars(klass).items():
                if isinstance(value, Endpoint) and not name.startswith("_"):
                    found[name] = value
        return found
