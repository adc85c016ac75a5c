"""Keycloak client (application) management operations."""
from __future__ import annotations

from .endpoints import Endpoint, ResourceHandler
from .mappings import ProtocolMappersMixin, ScopeMappingsMixin

_AUTHZ = "/{id}/authz/resource-server"


class ClientHandler(ProtocolMappersMixin, ScopeMappingsMixin, ResourceHandler):
    """Clients of a realm.

    Covers the client itself, its roles, secrets, default/optional client
    scopes, scope mappings, sessions, certificates, protocol mappers and the
    authorization services (resource server) API.

    Operations take ``id`` as the client's internal UUID, not its clientId.
    """

    resource = "clients"
    base_path = "/admin/realms/{realm}/clients"

    create = Endpoint("POST", "")
    find = Endpoint("GET", "")
    find_one = Endpoint("GET", "/{id}", not_found=True)
    update = Endpoint("PUT", "/{id}")
    delete = Endpoint("DELETE", "/{id}")

    # Client roles
    create_role = Endpoint("POST", "/{id}/roles")
    list_roles = Endpoint("GET", "/{id}/roles")
    find_role = Endpoint("GET", "/{id}/roles/{roleName}", not_found=True)
    update_role = Endpoint("PUT", "/{id}/roles/{roleName}")
    del_role = Endpoint("DELETE", "/{id}/roles/{roleName}")
    find_users_with_role = Endpoint("GET", "/{id}/roles/{roleName}/users")

    # Secrets and registration
    get_client_secret = Endpoint("GET", "/{id}/client-secret")
    generate_new_client_secret = Endpoint("POST", "/{id}/client-secret")
    get_rotated_secret = Endpoint("GET", "/{id}/client-secret/rotated")
    invalidate_secret = Endpoint("DELETE", "/{id}/client-secret/rotated")
    generate_registration_access_token = Endpoint("POST", "/{id}/registration-access-token")
    get_installation_providers = Endpoint("GET", "/{id}/installation/providers/{providerId}")
    get_service_account_user = Endpoint("GET", "/{id}/service-account-user")

    # Default and optional client scopes
    list_default_client_scopes = Endpoint("GET", "/{id}/default-client-scopes")
    add_default_client_scope = Endpoint("PUT", "/{id}/default-client-scopes/{clientScopeId}")
    del_default_client_scope = Endpoint("DELETE", "/{id}/default-client-scopes/{clientScopeId}")
    list_optional_client_scopes = Endpoint("GET", "/{id}/optional-client-scopes")
    add_optional_client_scope = Endpoint("PUT", "/{id}/optional-client-scopes/{clientScopeId}")
    del_optional_client_scope = Endpoint("DELETE", "/{id}/optional-client-scopes/{clientScopeId}")

    # Sessions
    list_sessions = Endpoint("GET", "/{id}/user-sessions")
    list_offline_sessions = Endpoint("GET", "/{id}/offline-sessions")
    get_session_count = Endpoint("GET", "/{id}/session-count")
    get_offline_session_count = Endpoint("GET", "/{id}/offline-session-count")

    # Cluster nodes
    add_cluster_node = Endpoint("POST", "/{id}/nodes", body_keys=("node",))
    delete_cluster_node = Endpoint("DELETE", "/{id}/nodes/{node}")

    # Certificates
    get_key_info = Endpoint("GET", "/{id}/certificates/{attr}")
    generate_key = Endpoint("POST", "/{id}/certificates/{attr}/generate")
    generate_and_download_key = Endpoint("POST", "/{id}/certificates/{attr}/generate-and-download", raw=True)
    download_key = Endpoint("POST", "/{id}/certificates/{attr}/download", raw=True)

    # Scope evaluation
    evaluate_generate_access_token = Endpoint("GET", "/{id}/evaluate-scopes/generate-example-access-token")
    evaluate_generate_id_token = Endpoint("GET", "/{id}/evaluate-scopes/generate-example-id-token")
    evaluate_generate_user_info = Endpoint("GET", "/{id}/evaluate-scopes/generate-example-userinfo")
    evaluate_list_protocol_mapper = Endpoint("GET", "/{id}/evaluate-scopes/protocol-mappers")

    # Fine-grained admin permissions
    list_fine_grain_permissions = Endpoint("GET", "/{id}/management/permissions")
    update_fine_grain_permission = Endpoint("PUT", "/{id}/management/permissions")

    # Authorization services: resource server
    get_resource_server = Endpoint("GET", _AUTHZ)
    update_resource_server = Endpoint("PUT", _AUTHZ)
    import_resource = Endpoint("POST", _AUTHZ + "/import")
    export_resource = Endpoint("GET", _AUTHZ + "/settings")

    # Authorization services: resources
    list_resources = Endpoint("GET", _AUTHZ + "/resource")
    create_resource = Endpoint("POST", _AUTHZ + "/resource")
    get_resource = Endpoint("GET", _AUTHZ + "/resource/{resourceId}", not_found=True)
    update_resource = Endpoint("PUT", _AUTHZ + "/resource/{resourceId}")
    del_resource = Endpoint("DELETE", _AUTHZ + "/resource/{resourceId}")
    list_scopes_by_resource = Endpoint("GET", _AUTHZ + "/resource/{resourceName}/scopes")
    list_permissions_by_resource = Endpoint("GET", _AUTHZ + "/resource/{resourceId}/permissions")

    # Authorization services: scopes
    list_all_scopes = Endpoint("GET", _AUTHZ + "/scope")
    create_authorization_scope = Endpoint("POST", _AUTHZ + "/scope")
    get_authorization_scope = Endpoint("GET", _AUTHZ + "/scope/{scopeId}", not_found=True)
    update_authorization_scope = Endpoint("PUT", _AUTHZ + "/scope/{scopeId}")
    del_authorization_scope = Endpoint("DELETE", _AUTHZ + "/scope/{scopeId}")
    list_all_resources_by_scope = Endpoint("GET", _AUTHZ + "/scope/{scopeId}/resources")
    list_all_permissions_by_scope = Endpoint("GET", _AUTHZ + "/scope/{scopeId}/permissions")

    # Authorization services: policies and permissions
    list_policy_providers = Endpoint("GET", _AUTHZ + "/policy/providers")
    list_policies = Endpoint("GET", _AUTHZ + "/policy")
    create_policy = Endpoint("POST", _AUTHZ + "/policy/{type}")
    del_policy = Endpoint("DELETE", _AUTHZ + "/policy/{policyId}")
    list_dependent_policies = Endpoint("GET", _AUTHZ + "/policy/{policyId}/dependentPolicies")
    find_permissions = Endpoint("GET", _AUTHZ + "/permission")
    create_permission = Endpoint("POST", _AUTHZ + "/permission/{type}")
    list_permission_scope = Endpoint("GET", _AUTHZ + "/permission/scope")
    get_associated_scopes = Endpoint("GET", _AUTHZ + "/policy/{permissionId}/scopes")
    get_associated_resources = Endpoint("GET", _AUTHZ + "/policy/{permissionId}/resources")
    get_associated_policies = Endpoint("GET", _AUTHZ + "/policy/{permissionId}/associatedPolicies")
