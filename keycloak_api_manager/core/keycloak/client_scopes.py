"""Keycloak client scope operations."""
from __future__ import annotations
from typing import Any, Mapping, Optional

from .endpoints import Endpoint, ResourceHandler
from .exceptions import KeycloakConfigError
from .mappings import ProtocolMappersMixin, ScopeMappingsMixin


class ClientScopeHandler(ProtocolMappersMixin, ScopeMappingsMixin, ResourceHandler):
    """Client scopes of a realm and the realm-wide default/optional scope lists."""

    resource = "client_scopes"
    base_path = "/admin/realms/{realm}/client-scopes"

    create = Endpoint("POST", "")
    find = Endpoint("GET", "")
    find_one = Endpoint("GET", "/{id}", not_found=True)
    update = Endpoint("PUT", "/{id}")
    delete = Endpoint("DELETE", "/{id}")

    # Realm defaults assigned to newly created clients
    list_default_client_scopes = Endpoint("GET", "/admin/realms/{realm}/default-default-client-scopes")
    add_default_client_scope = Endpoint("PUT", "/admin/realms/{realm}/default-default-client-scopes/{id}")
    del_default_client_scope = Endpoint("DELETE", "/admin/realms/{realm}/default-default-client-scopes/{id}")
    list_default_optional_client_scopes = Endpoint("GET", "/admin/realms/{realm}/default-optional-client-scopes")
    add_default_optional_client_scope = Endpoint("PUT", "/admin/realms/{realm}/default-optional-client-scopes/{id}")
    del_default_optional_client_scope = Endpoint("DELETE", "/admin/realms/{realm}/default-optional-client-scopes/{id}")

    find_protocol_mapper = Endpoint("GET", "/{id}/protocol-mappers/models/{mapperId}", not_found=True)

    def find_one_by_name(self, params: Optional[Mapping[str, Any]] = None) -> Optional[dict]:
        """Return the client scope called params["name"], or None."""
        params = dict(params or {})
        name = params.pop("name", None)
        if not name:
            raise KeycloakConfigError("client_scopes.find_one_by_name: missing required parameter 'name'")
        scopes = self.find(params) or []
        return next((scope for scope in scopes if scope.get("name") == name), None)

    def del_by_name(self, params: Optional[Mapping[str, Any]] = None) -> None:
        """Delete the client scope called params["name"]; a missing scope is a no-op."""
        scope = self.find_one_by_name(params)
        if scope is None:
            return None
        return self.delete({"realm": self.realm_of(params), "id": scope["id"]})
