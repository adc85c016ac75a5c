"""Endpoint groups shared by several resource families."""
from __future__ import annotations
from typing import Any, Mapping, Optional

from .endpoints import Endpoint


class RoleMappingsMixin:
    """Role mappings of a user or group ({base}/{id}/role-mappings)."""

    list_role_mappings = Endpoint("GET", "/{id}/role-mappings")

    add_realm_role_mappings = Endpoint("POST", "/{id}/role-mappings/realm", payload_key="roles")
    del_realm_role_mappings = Endpoint("DELETE", "/{id}/role-mappings/realm", payload_key="roles")
    list_realm_role_mappings = Endpoint("GET", "/{id}/role-mappings/realm")
    list_available_realm_role_mappings = Endpoint("GET", "/{id}/role-mappings/realm/available")
    list_composite_realm_role_mappings = Endpoint("GET", "/{id}/role-mappings/realm/composite")

    add_client_role_mappings = Endpoint("POST", "/{id}/role-mappings/clients/{clientUniqueId}", payload_key="roles")
    del_client_role_mappings = Endpoint("DELETE", "/{id}/role-mappings/clients/{clientUniqueId}", payload_key="roles")
    list_client_role_mappings = Endpoint("GET", "/{id}/role-mappings/clients/{clientUniqueId}")
    list_available_client_role_mappings = Endpoint("GET", "/{id}/role-mappings/clients/{clientUniqueId}/available")
    list_composite_client_role_mappings = Endpoint("GET", "/{id}/role-mappings/clients/{clientUniqueId}/composite")


class ScopeMappingsMixin:
    """Scope mappings of a client or client scope ({base}/{id}/scope-mappings)."""

    list_scope_mappings = Endpoint("GET", "/{id}/scope-mappings")

    add_client_scope_mappings = Endpoint("POST", "/{id}/scope-mappings/clients/{client}", payload_key="roles")
    del_client_scope_mappings = Endpoint("DELETE", "/{id}/scope-mappings/clients/{client}", payload_key="roles")
    list_client_scope_mappings = Endpoint("GET", "/{id}/scope-mappings/clients/{client}")
    list_available_client_scope_mappings = Endpoint("GET", "/{id}/scope-mappings/clients/{client}/available")
    list_composite_client_scope_mappings = Endpoint("GET", "/{id}/scope-mappings/clients/{client}/composite")

    add_realm_scope_mappings = Endpoint("POST", "/{id}/scope-mappings/realm", payload_key="roles")
    del_realm_scope_mappings = Endpoint("DELETE", "/{id}/scope-mappings/realm", payload_key="roles")
    list_realm_scope_mappings = Endpoint("GET", "/{id}/scope-mappings/realm")
    list_available_realm_scope_mappings = Endpoint("GET", "/{id}/scope-mappings/realm/available")
    list_composite_realm_scope_mappings = Endpoint("GET", "/{id}/scope-mappings/realm/composite")


class ProtocolMappersMixin:
    """Protocol mappers of a client or client scope ({base}/{id}/protocol-mappers)."""

    list_protocol_mappers = Endpoint("GET", "/{id}/protocol-mappers/models")
    add_protocol_mapper = Endpoint("POST", "/{id}/protocol-mappers/models")
    add_multiple_protocol_mappers = Endpoint("POST", "/{id}/protocol-mappers/add-models")
    update_protocol_mapper = Endpoint("PUT", "/{id}/protocol-mappers/models/{mapperId}")
    del_protocol_mapper = Endpoint("DELETE", "/{id}/protocol-mappers/models/{mapperId}")
    find_protocol_mapper_by_id = Endpoint("GET", "/{id}/protocol-mappers/models/{mapperId}", not_found=True)
    find_protocol_mappers_by_protocol = Endpoint("GET", "/{id}/protocol-mappers/protocol/{protocol}")

    def find_protocol_mapper_by_name(self: Any, params: Optional[Mapping[str, Any]] = None) -> Optional[dict]:
        """Return the mapper whose name matches params["name"], or None."""
        params = dict(params or {})
        name = params.pop("name", None)
        mappers = self.list_protocol_mappers(params) or []
        return next((mapper for mapper in mappers if mapper.get("name") == name), None)


__all__ = ["RoleMappingsMixin", "ScopeMappingsMixin", "ProtocolMappersMixin"]
