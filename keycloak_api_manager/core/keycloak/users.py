"""Keycloak user management operations."""
from __future__ import annotations

from .endpoints import Endpoint, ResourceHandler, normalize_count
from .mappings import RoleMappingsMixin


class UserHandler(RoleMappingsMixin, ResourceHandler):
    """Users of a realm: lifecycle, credentials, groups, role mappings, sessions.

    Usage:
        users = UserHandler(client)
        users.create({"realm": "demo"}, {"username": "alice", "enabled": True})
        alice = users.find({"username": "alice", "exact": True})
        users.add_to_group({"id": alice[0]["id"], "groupId": group_id})
    """

    resource = "users"
    base_path = "/admin/realms/{realm}/users"

    create = Endpoint("POST", "")
    find = Endpoint("GET", "")
    find_one = Endpoint("GET", "/{id}", not_found=True)
    count = Endpoint("GET", "/count", transform=normalize_count)
    update = Endpoint("PUT", "/{id}")
    delete = Endpoint("DELETE", "/{id}")

    # Credentials
    reset_password = Endpoint("PUT", "/{id}/reset-password", payload_key="credential")
    get_credentials = Endpoint("GET", "/{id}/credentials")
    delete_credential = Endpoint("DELETE", "/{id}/credentials/{credentialId}")
    update_credential_label = Endpoint("PUT", "/{id}/credentials/{credentialId}/userLabel", payload_key="label", content_type="text/plain")
    get_user_storage_credential_types = Endpoint("GET", "/{id}/configured-user-storage-credential-types")
    execute_actions_email = Endpoint("PUT", "/{id}/execute-actions-email", payload_key="actions")

    get_profile = Endpoint("GET", "/profile")

    # Groups
    list_groups = Endpoint("GET", "/{id}/groups")
    count_groups = Endpoint("GET", "/{id}/groups/count", transform=normalize_count)
    add_to_group = Endpoint("PUT", "/{id}/groups/{groupId}")
    del_from_group = Endpoint("DELETE", "/{id}/groups/{groupId}")

    # Sessions and consents
    list_sessions = Endpoint("GET", "/{id}/sessions")
    list_offline_sessions = Endpoint("GET", "/{id}/offline-sessions/{clientId}")
    logout = Endpoint("POST", "/{id}/logout")
    list_consents = Endpoint("GET", "/{id}/consents")
    revoke_consent = Endpoint("DELETE", "/{id}/consents/{clientId}")
    impersonation = Endpoint("POST", "/{id}/impersonation")

    # Federated identities
    list_federated_identities = Endpoint("GET", "/{id}/federated-identity")
    add_to_federated_identity = Endpoint("POST", "/{id}/federated-identity/{federatedIdentityId}", payload_key="federatedIdentity")
    del_from_federated_identity = Endpoint("DELETE", "/{id}/federated-identity/{federatedIdentityId}")
