"""Credential containers accepted by the manager."""
from __future__ import annotations
import re
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional

from .exceptions import KeycloakConfigError

GRANT_PASSWORD = "password"
GRANT_CLIENT_CREDENTIALS = "client_credentials"
GRANT_REFRESH_TOKEN = "refresh_token"


def to_snake_case(key: str) -> str:
    """realmName -> realm_name; grant_type stays as is."""
    return re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", key).lower()


def normalize_keys(values: Mapping[str, Any]) -> Dict[str, Any]:
    return {to_snake_case(key): value for key, value in values.items()}


@dataclass
class GrantCredentials:
    """Grant-specific payload kept in memory for re-authentication."""
    grant_type: str = GRANT_PASSWORD
    username: Optional[str] = None
    password: Optional[str] = None
    refresh_token: Optional[str] = None
    totp: Optional[str] = None
    scope: Optional[str] = None
    offline_token: bool = False

    def validate(self) -> None:
        if not self.grant_type:
            raise KeycloakConfigError("grant_type is required")
        if self.grant_type == GRANT_PASSWORD and not (self.username and self.password):
            raise KeycloakConfigError("password grant requires username and password")
        if self.grant_type == GRANT_REFRESH_TOKEN and not self.refresh_token:
            raise KeycloakConfigError("refresh_token grant requires refresh_token")

    def form_fields(self) -> Dict[str, str]:
        """Token endpoint form fields, excluding client identification."""
        form = {"grant_type": self.grant_type}
        if self.username is not None:
            form["username"] = self.username
        if self.password is not None:
            form["password"] = self.password
        if self.totp:
            form["totp"] = self.totp
        if self.refresh_token:
            form["refresh_token"] = self.refresh_token

        scopes = self.scope.split() if self.scope else []
        if self.offline_token and "offline_access" not in scopes:
            scopes.append("offline_access")
        if scopes:
            form["scope"] = " ".join(scopes)
        return form


@dataclass
class AdminCredentials:
    """Everything configure() needs to open the admin session.

    Attributes:
        base_url: Keycloak root URL
        realm_name: Realm used both for authentication and as default call context
        client_id: Client used to authenticate (e.g., admin-cli)
        client_secret: Secret for confidential clients
        token_life_span: Access token lifespan in seconds (drives the refresh interval)
        request_options: Extra keyword arguments for requests
        grant: Grant-specific credentials
    """
    base_url: str
    realm_name: str
    client_id: str
    client_secret: Optional[str] = None
    token_life_span: Any = None
    request_options: Dict[str, Any] = field(default_factory=dict)
    grant: GrantCredentials = field(default_factory=GrantCredentials)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "AdminCredentials":
        """Build from camelCase or snake_case keys (baseUrl, realmName, grantType...)."""
        data = normalize_keys(values)
        # tokenLifeSpan and tokenLifespan both show up in the wild
        if "token_lifespan" in data and "token_life_span" not in data:
            data["token_life_span"] = data.pop("token_lifespan")

        grant_names = {f.name for f in fields(GrantCredentials)}
        grant_values = {key: data.pop(key) for key in list(data) if key in grant_names}
        if grant_values.get("grant_type") is None:
            grant_values.pop("grant_type", None)

        missing = [name for name in ("base_url", "realm_name", "client_id") if not data.get(name)]
        if missing:
            raise KeycloakConfigError(f"Missing required configuration: {', '.join(missing)}")
        if not isinstance(data["base_url"], str):
            raise KeycloakConfigError("Invalid baseUrl. It must be a non-empty string.")

        known = {f.name for f in fields(cls)} - {"grant"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise KeycloakConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        return cls(
            base_url=data["base_url"],
            realm_name=data["realm_name"],
            client_id=data["client_id"],
            client_secret=data.get("client_secret"),
            token_life_span=data.get("token_life_span"),
            request_options=dict(data.get("request_options") or {}),
            grant=GrantCredentials(**grant_values),
        )
