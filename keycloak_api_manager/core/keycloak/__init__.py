"""Keycloak Admin API client library.

This package provides a session-managed interface to the Keycloak Admin API.

Architecture:
- credentials.py: Configuration and grant credentials (camelCase or snake_case)
- client.py: Admin session holding the token pair and connection context
- scheduler.py: Background token refresh
- http_api.py: Authenticated REST helper for endpoints without a handler entry
- endpoints.py: Declarative endpoint table shared by every handler
- users.py, groups.py, roles.py, realms.py, clients.py, ...: Resource handlers
- manager.py: Lifecycle controller (configure / set_config / get_token / stop)
- exceptions.py: Typed exceptions for error handling

Usage:
    # Using an explicit manager (recommended)
    from keycloak_api_manager.core.keycloak import KeycloakManager

    manager = KeycloakManager()
    manager.configure(baseUrl="http://keycloak:8080", realmName="master",
                      clientId="admin-cli", username="admin", password="admin")
    manager.users.find({"realm": "demo", "username": "alice"})

    # Using module-level functions (process-wide default session)
    from keycloak_api_manager.core.keycloak import configure, get_token, stop

    kc = configure(baseUrl=..., realmName="master", clientId="admin-cli", ...)
    kc.groups.count()
    stop()
"""
from .client import KeycloakClient, TokenPair
from .credentials import (
    AdminCredentials,
    GrantCredentials,
    GRANT_PASSWORD,
    GRANT_CLIENT_CREDENTIALS,
    GRANT_REFRESH_TOKEN,
)
from .endpoints import Endpoint, ResourceHandler, normalize_count
from .exceptions import (
    KeycloakError,
    KeycloakAPIError,
    KeycloakAuthenticationError,
    KeycloakConfigError,
    KeycloakNotConfiguredError,
    ResourceNotFoundError,
)
from .http_api import REQUEST_TIMEOUT, make_request
from .manager import (
    HANDLER_REGISTRY,
    KeycloakManager,
    LifecycleState,
    default_manager,
    configure,
    set_config,
    get_token,
    stop,
    auth,
    login,
    login_pkce,
    generate_authorization_url,
)
from .scheduler import DEFAULT_REFRESH_INTERVAL_MS, RefreshScheduler, compute_refresh_interval

__all__ = [
    # Session
    "KeycloakClient",
    "TokenPair",
    "AdminCredentials",
    "GrantCredentials",
    "GRANT_PASSWORD",
    "GRANT_CLIENT_CREDENTIALS",
    "GRANT_REFRESH_TOKEN",
    # Endpoints
    "Endpoint",
    "ResourceHandler",
    "normalize_count",
    "REQUEST_TIMEOUT",
    "make_request",
    # Exceptions
    "KeycloakError",
    "KeycloakAPIError",
    "KeycloakAuthenticationError",
    "KeycloakConfigError",
    "KeycloakNotConfiguredError",
    "ResourceNotFoundError",
    # Lifecycle
    "HANDLER_REGISTRY",
    "KeycloakManager",
    "LifecycleState",
    "default_manager",
    "configure",
    "set_config",
    "get_token",
    "stop",
    "auth",
    "login",
    "login_pkce",
    "generate_authorization_url",
    # Refresh
    "DEFAULT_REFRESH_INTERVAL_MS",
    "RefreshScheduler",
    "compute_refresh_interval",
]
