"""Keycloak server information."""
from __future__ import annotations

from .endpoints import Endpoint, ResourceHandler


class ServerInfoHandler(ResourceHandler):
    resource = "server_info"
    base_path = "/admin/serverinfo"

    get_info = Endpoint("GET", "")
