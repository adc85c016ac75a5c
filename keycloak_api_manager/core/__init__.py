"""Core library code (Keycloak admin session and resource handlers)."""
