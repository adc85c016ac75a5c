"""Keycloak Admin API manager with background token refresh."""
from .core.keycloak import (
    AdminCredentials,
    GrantCredentials,
    KeycloakAPIError,
    KeycloakAuthenticationError,
    KeycloakConfigError,
    KeycloakError,
    KeycloakManager,
    KeycloakNotConfiguredError,
    LifecycleState,
    ResourceNotFoundError,
    TokenPair,
    auth,
    configure,
    generate_authorization_url,
    get_token,
    login,
    login_pkce,
    set_config,
    stop,
)

__version__ = "0.1.0"

__all__ = [
    "AdminCredentials",
    "GrantCredentials",
    "KeycloakAPIError",
    "KeycloakAuthenticationError",
    "KeycloakConfigError",
    "KeycloakError",
    "KeycloakManager",
    "KeycloakNotConfiguredError",
    "LifecycleState",
    "ResourceNotFoundError",
    "TokenPair",
    "auth",
    "configure",
    "generate_authorization_url",
    "get_token",
    "login",
    "login_pkce",
    "set_config",
    "stop",
]
