"""Keycloak component operations (user federation, key providers, ...)."""
from __future__ import annotations

from .endpoints import Endpoint, ResourceHandler


class ComponentHandler(ResourceHandler):
    resource = "components"
    base_path = "/admin/realms/{realm}/components"

    create = Endpoint("POST", "")
    find = Endpoint("GET", "")
    find_one = Endpoint("GET", "/{id}", not_found=True)
    update = Endpoint("PUT", "/{id}")
    delete = Endpoint("DELETE", "/{id}")
    list_sub_components = Endpoint("GET", "/{id}/sub-component-types")
