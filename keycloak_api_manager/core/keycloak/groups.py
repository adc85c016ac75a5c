"""Keycloak group management operations."""
from __future__ import annotations

from .endpoints import Endpoint, ResourceHandler, normalize_count
from .mappings import RoleMappingsMixin


class GroupHandler(RoleMappingsMixin, ResourceHandler):
    """Groups of a realm, their hierarchy and role mappings."""

    resource = "groups"
    base_path = "/admin/realms/{realm}/groups"

    create = Endpoint("POST", "")
    find = Endpoint("GET", "")
    find_one = Endpoint("GET", "/{id}", not_found=True)
    count = Endpoint("GET", "/count", transform=normalize_count)
    update = Endpoint("PUT", "/{id}")
    delete = Endpoint("DELETE", "/{id}")

    list_sub_groups = Endpoint("GET", "/{parentId}/children")
    create_child_group = Endpoint("POST", "/{id}/children")
    list_members = Endpoint("GET", "/{id}/members")
