"""Brute-force detection status and login failure resets."""
from __future__ import annotations

from .endpoints import Endpoint, ResourceHandler


class AttackDetectionHandler(ResourceHandler):
    resource = "attack_detection"
    base_path = "/admin/realms/{realm}/attack-detection/brute-force/users"

    get_user_brute_force_status = Endpoint("GET", "/{id}")
    # Keycloak only exposes per-user status
    get_brute_force_status = Endpoint("GET", "/{id}")
    clear_user_login_failures = Endpoint("DELETE", "/{id}")
    clear_all_login_failures = Endpoint("DELETE", "")
