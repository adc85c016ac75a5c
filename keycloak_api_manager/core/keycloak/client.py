"""Authenticated admin session for the Keycloak Admin API.

Holds the connection context (base URL, realms, client identity) and the
current token pair.
"""
from __future__ import annotations
import json
import logging
import threading
from typing import Any, Dict, Mapping, NamedTuple, Optional

import requests

from .credentials import GrantCredentials, normalize_keys
from .exceptions import KeycloakAuthenticationError, KeycloakConfigError
from .http_api import REQUEST_TIMEOUT, parse_error_body, build_url, make_request

logger = logging.getLogger(__name__)

_CONFIG_KEYS = ("realm_name", "base_url", "request_options", "realm_path")


class TokenPair(NamedTuple):
    access_token: Optional[str]
    refresh_token: Optional[str]


def normalize_base_url(base_url: Any) -> str:
    """Validate the server root URL and strip any trailing slash."""
    if not base_url or not isinstance(base_url, str):
        raise KeycloakConfigError("Invalid baseUrl. It must be a non-empty string.")
    return base_url.rstrip("/")


class KeycloakClient:
    """Admin session shared by every resource handler.

    Features:
    - Token pair swapped atomically on every successful authentication
    - Realm context decoupled from the realm the admin authenticates in
    - Centralized request path through http_api.make_request

    Usage:
        client = KeycloakClient("http://keycloak:8080", "master", "admin-cli")
        client.authenticate(GrantCredentials(username="admin", password="admin"))
        users = client.get("/admin/realms/master/users")
    """

    def __init__(
        self,
        base_url: str,
        realm_name: str,
        client_id: str,
        client_secret: Optional[str] = None,
        request_options: Optional[Mapping[str, Any]] = None,
    ):
        """Initialize the session.

        Args:
            base_url: Keycloak root URL
            realm_name: Default realm for admin calls and for authentication
            client_id: Client used at the token endpoint
            client_secret: Secret for confidential clients
            request_options: Extra keyword arguments for requests
        """
        self.base_url = normalize_base_url(base_url)
        self.realm_name = realm_name
        self.auth_realm = realm_name
        self.client_id = client_id
        self.client_secret = client_secret
        self.request_options: Dict[str, Any] = dict(request_options or {})
        self._lock = threading.Lock()
        self._access_token: Optional[str] = None
        self._refresh_token: Optional[str] = None

    @property
    def access_token(self) -> Optional[str]:
        with self._lock:
            return self._access_token

    @property
    def refresh_token(self) -> Optional[str]:
        with self._lock:
            return self._refresh_token

    def token_pair(self) -> TokenPair:
        """Return both tokens from a single consistent read."""
        with self._lock:
            return TokenPair(self._access_token, self._refresh_token)

    def set_config(self, config: Optional[Mapping[str, Any]] = None, **overrides: Any) -> None:
        """Merge context overrides without touching tokens.

        Args:
            config: Mapping with realmName/baseUrl/requestOptions/realmPath (camelCase or snake_case)
            **overrides: Same keys as keyword arguments

        Raises:
            KeycloakConfigError: On unknown keys or invalid base URL
        """
        values = normalize_keys(dict(config or {}, **overrides))
        unknown = sorted(set(values) - set(_CONFIG_KEYS))
        if unknown:
            raise KeycloakConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        if values.get("base_url") is not None:
            self.base_url = normalize_base_url(values["base_url"])
        if values.get("realm_name") is not None:
            self.realm_name = values["realm_name"]
        if values.get("realm_path") is not None:
            self.auth_realm = values["realm_path"]
        if values.get("request_options") is not None:
            self.request_options.update(values["request_options"])

    @property
    def token_url(self) -> str:
        return build_url(self.base_url, f"/realms/{self.auth_realm}/protocol/openid-connect/token")

    def authenticate(self, grant: GrantCredentials) -> TokenPair:
        """Exchange grant credentials for a token pair and store it.

        Args:
            grant: Grant-specific credentials

        Returns:
            The newly stored token pair

        Raises:
            KeycloakConfigError: If the grant credentials are incomplete
            KeycloakAuthenticationError: If the token endpoint rejects the request
            requests.RequestException: On transport failure
        """
        grant.validate()
        data = grant.form_fields()
        data["client_id"] = self.client_id
        if self.client_secret:
            data["client_secret"] = self.client_secret

        payload = self.post_token_form(self.token_url, data)
        access_token = payload.get("access_token")
        if not access_token:
            raise KeycloakAuthenticationError("Token response did not contain an access_token", response=payload)

        with self._lock:
            self._access_token = access_token
            self._refresh_token = payload.get("refresh_token")
        logger.debug("[auth] Token issued for client '%s' in realm '%s'", self.client_id, self.auth_realm)
        return TokenPair(access_token, payload.get("refresh_token"))

    def post_token_form(self, url: str, data: Mapping[str, str], headers: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """POST a form to a token endpoint and return the decoded body."""
        options: Dict[str, Any] = {"timeout": REQUEST_TIMEOUT}
        options.update(self.request_options)
        options.pop("headers", None)
        resp = requests.post(url, data=data, headers=headers, **options)

        if not 200 <= resp.status_code < 300:
            payload = parse_error_body(resp.text)
            message = payload.get("error_description") or payload.get("error") or "Authentication failed"
            raise KeycloakAuthenticationError(message, status_code=resp.status_code, response=payload)

        try:
            payload = json.loads(resp.text)
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            raise KeycloakAuthenticationError(
                "Token endpoint returned a non-JSON response",
                status_code=resp.status_code,
                response={"message": resp.text},
            )
        return payload

    def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Execute an authenticated request with the current access token.

        Args:
            method: HTTP method
            path: Absolute API path (e.g., /admin/realms/demo/users)
            **kwargs: body, params, content_type, raw (see make_request)

        Returns:
            Parsed JSON body or None
        """
        return make_request(
            self.base_url,
            self.access_token,
            method,
            path,
            request_options=self.request_options,
            **kwargs,
        )

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.request("POST", path, body=json, params=params)

    def put(self, path: str, json: Any = None, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.request("PUT", path, body=json, params=params)

    def delete(self, path: str, json: Any = None, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.request("DELETE", path, body=json, params=params)
