"""Declarative user profile configuration (Keycloak 24+)."""
from __future__ import annotations

from .endpoints import Endpoint, ResourceHandler


class UserProfileHandler(ResourceHandler):
    resource = "user_profile"
    base_path = "/admin/realms/{realm}/users/profile"

    get_configuration = Endpoint("GET", "")
    update_configuration = Endpoint("PUT", "")
    get_metadata = Endpoint("GET", "/metadata")
