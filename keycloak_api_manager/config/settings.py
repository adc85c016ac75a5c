"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from ..core.keycloak.credentials import AdminCredentials, GrantCredentials, GRANT_PASSWORD
from ..core.keycloak.exceptions import KeycloakConfigError

logger = logging.getLogger(__name__)


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name

    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
        except OSError as e:
            logger.warning("[settings] Failed to read /run/secrets/%s: %s", secret_name, e)
        else:
            if secret_value:
                logger.debug("[settings] Loaded %s from /run/secrets", secret_name)
                return secret_value

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            logger.debug("[settings] Loaded %s from environment (fallback)", env_var)
            return secret_value

    return None


def _request_options_from_env() -> Dict[str, Any]:
    options: Dict[str, Any] = {}
    timeout = os.environ.get("KEYCLOAK_REQUEST_TIMEOUT")
    if timeout:
        try:
            options["timeout"] = float(timeout)
        except ValueError as exc:
            raise KeycloakConfigError(f"KEYCLOAK_REQUEST_TIMEOUT must be a number, got {timeout!r}") from exc
    verify = os.environ.get("KEYCLOAK_VERIFY_TLS")
    if verify is not None:
        options["verify"] = verify.lower() not in ("0", "false", "no")
    extra = os.environ.get("KEYCLOAK_REQUEST_OPTIONS")
    if extra:
        try:
            options.update(json.loads(extra))
        except ValueError as exc:
            raise KeycloakConfigError("KEYCLOAK_REQUEST_OPTIONS must be a JSON object") from exc
    return options


@dataclass
class ManagerSettings:
    """Admin session configuration container."""
    keycloak_url: str = "http://localhost:8080"
    keycloak_realm: str = "master"
    client_id: str = "admin-cli"
    client_secret: Optional[str] = None

    # Grant
    grant_type: str = GRANT_PASSWORD
    keycloak_admin: Optional[str] = "admin"
    keycloak_admin_password: Optional[str] = None
    totp: Optional[str] = None
    scope: Optional[str] = None
    offline_token: bool = False

    # Refresh cadence (seconds); None means the default interval
    token_lifespan: Optional[str] = None

    request_options: Dict[str, Any] = field(default_factory=dict)

    def to_credentials(self) -> AdminCredentials:
        """Translate settings into the configure() input."""
        # admin user/password only travel with the password grant
        user_grant = self.grant_type == GRANT_PASSWORD
        grant = GrantCredentials(
            grant_type=self.grant_type,
            username=self.keycloak_admin if user_grant else None,
            password=self.keycloak_admin_password if user_grant else None,
            totp=self.totp,
            scope=self.scope,
            offline_token=self.offline_token,
        )
        return AdminCredentials(
            base_url=self.keycloak_url,
            realm_name=self.keycloak_realm,
            client_id=self.client_id,
            client_secret=self.client_secret,
            token_life_span=self.token_lifespan,
            request_options=dict(self.request_options),
            grant=grant,
        )


def load_settings() -> ManagerSettings:
    """Load admin session settings from the environment and /run/secrets."""
    client_secret = _load_secret_from_file("keycloak_client_secret", "KEYCLOAK_CLIENT_SECRET")
    admin_password = _load_secret_from_file("keycloak_admin_password", "KEYCLOAK_ADMIN_PASSWORD")

    settings = ManagerSettings(
        keycloak_url=os.environ.get("KEYCLOAK_URL", "http://localhost:8080"),
        keycloak_realm=os.environ.get("KEYCLOAK_REALM", "master"),
        client_id=os.environ.get("KEYCLOAK_CLIENT_ID", "admin-cli"),
        client_secret=client_secret,
        grant_type=os.environ.get("KEYCLOAK_GRANT_TYPE", GRANT_PASSWORD),
        keycloak_admin=os.environ.get("KEYCLOAK_ADMIN", "admin"),
        keycloak_admin_password=admin_password,
        totp=os.environ.get("KEYCLOAK_TOTP") or None,
        scope=os.environ.get("KEYCLOAK_SCOPE") or None,
        offline_token=os.environ.get("KEYCLOAK_OFFLINE_TOKEN", "false").lower() == "true",
        token_lifespan=os.environ.get("KEYCLOAK_TOKEN_LIFESPAN") or None,
        request_options=_request_options_from_env(),
    )
    logger.debug(
        "[settings] Admin session target %s realm=%s client=%s grant=%s",
        settings.keycloak_url, settings.keycloak_realm, settings.client_id, settings.grant_type,
    )
    return settings
