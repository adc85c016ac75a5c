"""Authentication flows, executions and required actions."""
from __future__ import annotations

from .endpoints import Endpoint, ResourceHandler


class AuthenticationManagementHandler(ResourceHandler):
    """Authentication management API of a realm.

    Flows are addressed by id for CRUD and by alias (``flow``) for their
    executions, matching the Keycloak REST resources.
    """

    resource = "authentication_management"
    base_path = "/admin/realms/{realm}/authentication"

    # Required actions
    get_required_actions = Endpoint("GET", "/required-actions")
    get_unregistered_required_actions = Endpoint("GET", "/unregistered-required-actions")
    register_required_action = Endpoint("POST", "/register-required-action")
    get_required_action_for_alias = Endpoint("GET", "/required-actions/{alias}", not_found=True)
    update_required_action = Endpoint("PUT", "/required-actions/{alias}")
    delete_required_action = Endpoint("DELETE", "/required-actions/{alias}")
    lower_required_action_priority = Endpoint("POST", "/required-actions/{alias}/lower-priority")
    raise_required_action_priority = Endpoint("POST", "/required-actions/{alias}/raise-priority")
    get_required_action_config_description = Endpoint("GET", "/required-actions/{alias}/config-description")
    get_required_action_config = Endpoint("GET", "/required-actions/{alias}/config")
    update_required_action_config = Endpoint("PUT", "/required-actions/{alias}/config")
    remove_required_action_config = Endpoint("DELETE", "/required-actions/{alias}/config")

    # Providers
    get_client_authenticator_providers = Endpoint("GET", "/client-authenticator-providers")
    get_form_action_providers = Endpoint("GET", "/form-action-providers")
    get_authenticator_providers = Endpoint("GET", "/authenticator-providers")
    get_form_providers = Endpoint("GET", "/form-providers")

    # Flows
    get_flows = Endpoint("GET", "/flows")
    create_flow = Endpoint("POST", "/flows")
    get_flow = Endpoint("GET", "/flows/{flowId}", not_found=True)
    update_flow = Endpoint("PUT", "/flows/{flowId}")
    delete_flow = Endpoint("DELETE", "/flows/{flowId}")
    copy_flow = Endpoint("POST", "/flows/{flow}/copy", body_keys=("newName",))

    # Executions
    get_executions = Endpoint("GET", "/flows/{flow}/executions")
    add_execution_to_flow = Endpoint("POST", "/flows/{flow}/executions/execution", body_keys=("provider",))
    add_flow_to_flow = Endpoint("POST", "/flows/{flow}/executions/flow", body_keys=("alias", "type", "provider", "description"))
    update_execution = Endpoint("PUT", "/flows/{flow}/executions")
    del_execution = Endpoint("DELETE", "/executions/{id}")
    raise_priority_execution = Endpoint("POST", "/executions/{id}/raise-priority")
    lower_priority_execution = Endpoint("POST", "/executions/{id}/lower-priority")

    # Authenticator configs
    create_config = Endpoint("POST", "/executions/{id}/config")
    get_config = Endpoint("GET", "/config/{id}")
    update_config = Endpoint("PUT", "/config/{id}")
    del_config = Endpoint("DELETE", "/config/{id}")
    get_config_description = Endpoint("GET", "/config-description/{providerId}")
