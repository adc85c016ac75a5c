"""Keycloak-specific exceptions for error handling."""
from __future__ import annotations
from typing import Any, Optional


class KeycloakError(Exception):
    """Base exception for all Keycloak operations."""
    pass


class KeycloakAPIError(KeycloakError):
    """HTTP error from Keycloak Admin API.
    
    Attributes:
        status_code: HTTP status code
        message: Error message extracted from the response
        endpoint: API endpoint that failed
        response: Parsed error body (or {"message": raw_text})
    """
    
    def __init__(self, status_code: int, message: str, endpoint: str, response: Optional[Any] = None):
        self.status_code = status_code
        self.message = message
        self.endpoint = endpoint
        self.response = response
        super().__init__(message)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"KeycloakAPIError([{self.status_code}] {self.endpoint}: {self.message})"


class KeycloakAuthenticationError(KeycloakError):
    """Token endpoint rejected the credentials.
    
    Attributes:
        status_code: HTTP status code returned by the token endpoint (None when unknown)
        response: Parsed error body
    """

    def __init__(self, message: str, status_code: Optional[int] = None, response: Optional[Any] = None):
        self.message = message
        self.status_code = status_code
        self.response = response
        super().__init__(message)


class KeycloakConfigError(KeycloakError, ValueError):
    """Invalid or incomplete manager configuration."""
    pass


class KeycloakNotConfiguredError(KeycloakError):
    """Manager used before configure() succeeded."""

    def __init__(self, message: str = "Keycloak Admin Client is not configured. Call configure() first."):
        super().__init__(message)


class ResourceNotFoundError(KeycloakError):
    """Lookup of a named resource came back empty."""
    pass
