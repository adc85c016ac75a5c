"""Client policies and client profiles (Keycloak 12+).

Both resources are realm-wide documents read and replaced as a whole; the
calls go straight through the HTTP helper.
"""
from __future__ import annotations
from typing import Any, Mapping, Optional

from .endpoints import ResourceHandler
from .http_api import make_request


class ClientPoliciesHandler(ResourceHandler):
    resource = "client_policies"
    base_path = "/admin/realms/{realm}/client-policies"

    def _call(self, method: str, params: Optional[Mapping[str, Any]], suffix: str, body: Any = None) -> Any:
        params = dict(params or {})
        realm = params.pop("realm", None) or self.realm_name
        return make_request(
            self.client.base_url,
            self.client.access_token,
            method,
            f"/admin/realms/{realm}/client-policies/{suffix}",
            body=body,
            params=params,
            request_options=self.client.request_options,
        )

    def get_policies(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Return {"policies": [...]}; pass {"include-global-policies": True} to add built-ins."""
        return self._call("GET", params, "policies")

    def update_policies(self, params: Optional[Mapping[str, Any]] = None, policies: Any = None) -> Any:
        return self._call("PUT", params, "policies", policies)

    def get_profiles(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Return {"profiles": [...]}; pass {"include-global-profiles": True} to add built-ins."""
        return self._call("GET", params, "profiles")

    def update_profiles(self, params: Optional[Mapping[str, Any]] = None, profiles: Any = None) -> Any:
        return self._call("PUT", params, "profiles", profiles)
