"""Keycloak realm role operations."""
from __future__ import annotations

from .endpoints import Endpoint, ResourceHandler


class RoleHandler(ResourceHandler):
    """Realm-level roles, addressed by name or by id, and their composites."""

    resource = "roles"
    base_path = "/admin/realms/{realm}/roles"

    create = Endpoint("POST", "")
    find = Endpoint("GET", "")
    find_one_by_name = Endpoint("GET", "/{name}", not_found=True)
    update_by_name = Endpoint("PUT", "/{name}")
    del_by_name = Endpoint("DELETE", "/{name}")
    find_users_with_role = Endpoint("GET", "/{name}/users")

    find_one_by_id = Endpoint("GET", "/admin/realms/{realm}/roles-by-id/{id}", not_found=True)
    update_by_id = Endpoint("PUT", "/admin/realms/{realm}/roles-by-id/{id}")
    del_by_id = Endpoint("DELETE", "/admin/realms/{realm}/roles-by-id/{id}")

    create_composite = Endpoint("POST", "/admin/realms/{realm}/roles-by-id/{roleId}/composites", payload_key="roles")
    get_composite_roles = Endpoint("GET", "/admin/realms/{realm}/roles-by-id/{id}/composites")
    get_composite_roles_for_realm = Endpoint("GET", "/admin/realms/{realm}/roles-by-id/{id}/composites/realm")
    get_composite_roles_for_client = Endpoint("GET", "/admin/realms/{realm}/roles-by-id/{id}/composites/clients/{clientId}")
    del_composite_roles = Endpoint("DELETE", "/admin/realms/{realm}/roles-by-id/{id}/composites", payload_key="roles")
