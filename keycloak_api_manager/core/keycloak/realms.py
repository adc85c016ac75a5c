"""Keycloak realm management operations."""
from __future__ import annotations
import logging
from typing import Any, Mapping, Optional

from .endpoints import Endpoint, ResourceHandler
from .exceptions import KeycloakConfigError
from .http_api import make_request

logger = logging.getLogger(__name__)


class RealmHandler(ResourceHandler):
    """Realm-level administration.

    ``realm`` defaults to the session realm for every operation except
    ``find`` and ``create``, which act on the realm collection.
    """

    resource = "realms"
    base_path = "/admin/realms"

    find = Endpoint("GET", "")
    create = Endpoint("POST", "")
    find_one = Endpoint("GET", "/{realm}", not_found=True)
    update = Endpoint("PUT", "/{realm}")
    delete = Endpoint("DELETE", "/{realm}")

    partial_import = Endpoint("POST", "/{realm}/partialImport", payload_key="rep")
    export = Endpoint("POST", "/{realm}/partial-export")

    # Client registration
    get_client_registration_policy_providers = Endpoint("GET", "/{realm}/client-registration-policy/providers")
    create_clients_initial_access = Endpoint("POST", "/{realm}/clients-initial-access")
    get_clients_initial_access = Endpoint("GET", "/{realm}/clients-initial-access")
    del_clients_initial_access = Endpoint("DELETE", "/{realm}/clients-initial-access/{id}")

    # Default groups
    get_default_groups = Endpoint("GET", "/{realm}/default-groups")
    add_default_group = Endpoint("PUT", "/{realm}/default-groups/{id}")
    remove_default_group = Endpoint("DELETE", "/{realm}/default-groups/{id}")
    get_group_by_path = Endpoint("GET", "/{realm}/group-by-path/{path}", not_found=True, unquoted=("path",))

    # Events
    get_config_events = Endpoint("GET", "/{realm}/events/config")
    update_config_events = Endpoint("PUT", "/{realm}/events/config")
    find_events = Endpoint("GET", "/{realm}/events")
    find_admin_events = Endpoint("GET", "/{realm}/admin-events")
    clear_events = Endpoint("DELETE", "/{realm}/events")
    clear_admin_events = Endpoint("DELETE", "/{realm}/admin-events")

    # Keys, sessions, revocation
    get_keys = Endpoint("GET", "/{realm}/keys")
    get_client_session_stats = Endpoint("GET", "/{realm}/client-session-stats")
    push_revocation = Endpoint("POST", "/{realm}/push-revocation")
    logout_all = Endpoint("POST", "/{realm}/logout-all")
    delete_session = Endpoint("DELETE", "/{realm}/sessions/{session}")

    # Connection tests
    test_ldap_connection = Endpoint("POST", "/{realm}/testLDAPConnection")
    ldap_server_capabilities = Endpoint("POST", "/{realm}/ldap-server-capabilities")
    test_smtp_connection = Endpoint("POST", "/{realm}/testSMTPConnection", payload_key="settings")

    # Localization
    get_realm_specific_locales = Endpoint("GET", "/{realm}/localization")
    get_realm_localization_texts = Endpoint("GET", "/{realm}/localization/{selectedLocale}")
    add_localization = Endpoint("PUT", "/{realm}/localization/{selectedLocale}/{key}", payload_key="value", content_type="text/plain")
    delete_realm_localization_texts = Endpoint("DELETE", "/{realm}/localization/{selectedLocale}/{key}")

    def get_users_management_permissions(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Fine-grained users permissions of the realm (direct REST call)."""
        realm = self.realm_of(params)
        return make_request(
            self.client.base_url,
            self.client.access_token,
            "GET",
            f"/admin/realms/{realm}/users-management-permissions",
            request_options=self.client.request_options,
        )

    def update_users_management_permissions(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Enable or disable fine-grained users permissions (direct REST call).

        Args:
            params: {"realm": optional realm, "enabled": bool}

        Raises:
            KeycloakConfigError: If "enabled" is missing
        """
        params = params or {}
        if params.get("enabled") is None:
            raise KeycloakConfigError("realms.update_users_management_permissions: missing required parameter 'enabled'")
        realm = self.realm_of(params)
        logger.info("[realms] Setting users-management-permissions enabled=%s on realm '%s'", params.get("enabled"), realm)
        return make_request(
            self.client.base_url,
            self.client.access_token,
            "PUT",
            f"/admin/realms/{realm}/users-management-permissions",
            body={"enabled": params["enabled"]},
            request_options=self.client.request_options,
        )
