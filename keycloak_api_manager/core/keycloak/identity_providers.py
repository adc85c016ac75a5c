"""Keycloak identity provider (brokering) operations."""
from __future__ import annotations

from .endpoints import Endpoint, ResourceHandler


class IdentityProviderHandler(ResourceHandler):
    """Identity providers and their mappers, addressed by alias."""

    resource = "identity_providers"
    base_path = "/admin/realms/{realm}/identity-provider"

    create = Endpoint("POST", "/instances")
    find = Endpoint("GET", "/instances")
    find_one = Endpoint("GET", "/instances/{alias}", not_found=True)
    update = Endpoint("PUT", "/instances/{alias}")
    delete = Endpoint("DELETE", "/instances/{alias}")

    find_factory = Endpoint("GET", "/providers/{providerId}")
    import_from_url = Endpoint("POST", "/import-config")

    create_mapper = Endpoint("POST", "/instances/{alias}/mappers", payload_key="identityProviderMapper")
    find_mappers = Endpoint("GET", "/instances/{alias}/mappers")
    find_one_mapper = Endpoint("GET", "/instances/{alias}/mappers/{id}", not_found=True)
    update_mapper = Endpoint("PUT", "/instances/{alias}/mappers/{id}", payload_key="identityProviderMapper")
    del_mapper = Endpoint("DELETE", "/instances/{alias}/mappers/{id}")
    find_mapper_types = Endpoint("GET", "/instances/{alias}/mapper-types")

    list_permissions = Endpoint("GET", "/instances/{alias}/management/permissions")
    update_permission = Endpoint("PUT", "/instances/{alias}/management/permissions")
