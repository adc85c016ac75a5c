"""Keycloak organizations (Keycloak 25+)."""
from __future__ import annotations
from typing import Any, Mapping, Optional

from .endpoints import Endpoint, ResourceHandler
from .exceptions import ResourceNotFoundError


class OrganizationHandler(ResourceHandler):
    """Organizations with their members and linked identity providers.

    add_member and add_identity_provider send the bare user id or alias as a
    JSON string body, quotes included, not an object such as {"userId": ...};
    Keycloak rejects the object form on these two endpoints.
    """

    resource = "organizations"
    base_path = "/admin/realms/{realm}/organizations"

    create = Endpoint("POST", "")
    find = Endpoint("GET", "")
    find_one = Endpoint("GET", "/{id}", not_found=True)
    delete = Endpoint("DELETE", "/{id}")
    _replace = Endpoint("PUT", "/{id}")

    # Keycloak expects the bare user id / alias as a JSON string body
    add_member = Endpoint("POST", "/{id}/members", payload_key="userId")
    list_members = Endpoint("GET", "/{id}/members")
    del_member = Endpoint("DELETE", "/{id}/members/{userId}")

    add_identity_provider = Endpoint("POST", "/{id}/identity-providers", payload_key="alias")
    list_identity_providers = Endpoint("GET", "/{id}/identity-providers")
    del_identity_provider = Endpoint("DELETE", "/{id}/identity-providers/{alias}")

    def update(self, params: Optional[Mapping[str, Any]] = None, organization: Optional[Mapping[str, Any]] = None) -> Any:
        """Merge the given fields into the current representation and PUT the result.

        Keycloak replaces the whole organization on PUT, so omitted fields
        would otherwise be cleared.
        """
        current = self.find_one(params)
        if current is None:
            raise ResourceNotFoundError(f"organizations.update: organization '{(params or {}).get('id')}' not found")
        merged = {**current, **(organization or {})}
        return self._replace(params, merged)
