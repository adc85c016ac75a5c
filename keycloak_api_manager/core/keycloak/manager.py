"""Session lifecycle: configure, keep the admin token fresh, expose handlers.

Usage:
    from keycloak_api_manager import KeycloakManager

    manager = KeycloakManager()
    manager.configure(
        baseUrl="http://keycloak:8080",
        realmName="master",
        clientId="admin-cli",
        grantType="password",
        username="admin",
        password="admin",
        tokenLifeSpan=60,
    )
    manager.set_config(realm_name="demo")
    manager.users.find({"username": "alice"})
    manager.stop()
"""
from __future__ import annotations
import base64
import enum
import functools
import hashlib
import logging
import secrets
import threading
from typing import Any, Callable, Dict, Mapping, Optional, Type
from urllib.parse import urlencode

from .attack_detection import AttackDetectionHandler
from .authentication import AuthenticationManagementHandler
from .client import KeycloakClient, TokenPair
from .client_policies import ClientPoliciesHandler
from .client_scopes import ClientScopeHandler
from .clients import ClientHandler
from .components import ComponentHandler
from .credentials import AdminCredentials, GrantCredentials
from .endpoints import ResourceHandler
from .exceptions import KeycloakConfigError, KeycloakNotConfiguredError
from .groups import GroupHandler
from .identity_providers import IdentityProviderHandler
from .organizations import OrganizationHandler
from .realms import RealmHandler
from .roles import RoleHandler
from .scheduler import RefreshScheduler, compute_refresh_interval
from .server_info import ServerInfoHandler
from .user_profile import UserProfileHandler
from .users import UserHandler

logger = logging.getLogger(__name__)

HANDLER_REGISTRY: Dict[str, Type[ResourceHandler]] = {
    "realms": RealmHandler,
    "users": UserHandler,
    "clients": ClientHandler,
    "client_scopes": ClientScopeHandler,
    "identity_providers": IdentityProviderHandler,
    "groups": GroupHandler,
    "roles": RoleHandler,
    "components": ComponentHandler,
    "authentication_management": AuthenticationManagementHandler,
    "attack_detection": AttackDetectionHandler,
    "organizations": OrganizationHandler,
    "user_profile": UserProfileHandler,
    "client_policies": ClientPoliciesHandler,
    "server_info": ServerInfoHandler,
}

DEFAULT_AUTHORIZATION_SCOPE = "openid profile email"


class LifecycleState(enum.Enum):
    UNCONFIGURED = "unconfigured"
    AUTHENTICATING = "authenticating"
    READY = "ready"
    STOPPED = "stopped"


def _base64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def pkce_pair() -> tuple[str, str]:
    """Return a (code_verifier, S256 code_challenge) pair."""
    verifier = _base64url(secrets.token_bytes(96))
    challenge = _base64url(hashlib.sha256(verifier.encode("ascii")).digest())
    return verifier, challenge


class KeycloakManager:
    """Owns one admin session, its refresh scheduler and the handler registry.

    Handlers (``manager.users``, ``manager.realms``, ...) become available
    after the first successful configure() and stay bound to the same
    session object across token refreshes. stop() only disarms the
    scheduler; handlers keep working with the last token issued.
    """

    def __init__(
        self,
        on_refresh_error: Optional[Callable[[BaseException], Any]] = None,
        scheduler_factory: Callable[..., RefreshScheduler] = RefreshScheduler,
    ):
        self.on_refresh_error = on_refresh_error
        self.scheduler_factory = scheduler_factory
        self.state = LifecycleState.UNCONFIGURED
        self._client: Optional[KeycloakClient] = None
        self._grant: Optional[GrantCredentials] = None
        self._scheduler: Optional[RefreshScheduler] = None
        self._handlers: Dict[str, ResourceHandler] = {}
        self._lock = threading.RLock()

    def __getattr__(self, name: str) -> ResourceHandler:
        if name in HANDLER_REGISTRY:
            handlers = self.__dict__.get("_handlers") or {}
            if name not in handlers:
                raise KeycloakNotConfiguredError()
            return handlers[name]
        raise AttributeError(f"{type(self).__name__!s} has no attribute {name!r}")

    @property
    def client(self) -> KeycloakClient:
        """The live admin session."""
        self.assert_configured()
        return self._client

    @property
    def scheduler(self) -> Optional[RefreshScheduler]:
        return self._scheduler

    @property
    def handlers(self) -> Dict[str, ResourceHandler]:
        return dict(self._handlers)

    def handler(self, name: str) -> ResourceHandler:
        """Look up a handler by registry name (e.g., "client_scopes")."""
        if name not in HANDLER_REGISTRY:
            raise KeyError(f"Unknown handler '{name}'. Available: {', '.join(sorted(HANDLER_REGISTRY))}")
        return getattr(self, name)

    def assert_configured(self) -> None:
        if self._client is None or self.state in (LifecycleState.UNCONFIGURED, LifecycleState.AUTHENTICATING):
            raise KeycloakNotConfiguredError()

    # ─────────────────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────────────────
    def configure(self, credentials: Any = None, **kwargs: Any) -> None:
        """Authenticate the admin session, arm the refresh scheduler and bind handlers.

        Args:
            credentials: AdminCredentials or a mapping (camelCase or snake_case keys)
            **kwargs: Same keys as keyword arguments

        Raises:
            KeycloakConfigError: Missing/invalid configuration
            KeycloakAuthenticationError: Token endpoint rejected the credentials
            requests.RequestException: Transport failure
        """
        if isinstance(credentials, AdminCredentials):
            if kwargs:
                raise KeycloakConfigError("Pass either AdminCredentials or keyword arguments, not both")
            admin = credentials
        else:
            admin = AdminCredentials.from_mapping(dict(credentials or {}, **kwargs))

        with self._lock:
            self._disarm()
            self.state = LifecycleState.AUTHENTICATING
            try:
                client = KeycloakClient(
                    admin.base_url,
                    admin.realm_name,
                    admin.client_id,
                    client_secret=admin.client_secret,
                    request_options=admin.request_options,
                )
                client.authenticate(admin.grant)
            except KeycloakConfigError as e:
                self._reset()
                logger.error("[configure] Invalid configuration: %s", e)
                raise
            except Exception:
                self._reset()
                logger.error("[configure] Authentication against %s failed", admin.base_url)
                raise

            self._client = client
            self._grant = admin.grant
            self._arm(compute_refresh_interval(admin.token_life_span))
            self._bind_handlers()
            self.state = LifecycleState.READY
        logger.info("[configure] Admin session ready for realm '%s' at %s", admin.realm_name, client.base_url)

    def set_config(self, config: Optional[Mapping[str, Any]] = None, **overrides: Any) -> None:
        """Override realm name, base URL, request options or realm path; tokens are untouched."""
        self.assert_configured()
        self._client.set_config(config, **overrides)

    def get_token(self) -> TokenPair:
        """Current admin token pair; (None, None) before a successful configure()."""
        client = self._client
        if client is None:
            return TokenPair(None, None)
        return client.token_pair()

    def stop(self) -> None:
        """Disarm the refresh scheduler. Safe to call repeatedly."""
        with self._lock:
            self._disarm()
            if self.state is LifecycleState.READY:
                self.state = LifecycleState.STOPPED

    def refresh(self) -> TokenPair:
        """Re-authenticate now with the stored grant credentials."""
        self.assert_configured()
        return self._client.authenticate(self._grant)

    def _arm(self, interval_ms: float) -> None:
        # bound to this session, so a tick still in flight after re-configure cannot touch the new one
        tick = functools.partial(self._client.authenticate, self._grant)
        self._scheduler = self.scheduler_factory(tick, interval_ms, on_error=self.on_refresh_error)
        self._scheduler.start()

    def _disarm(self) -> None:
        if self._scheduler is not None:
            self._scheduler.cancel()
            self._scheduler = None

    def _bind_handlers(self) -> None:
        for name, handler_cls in HANDLER_REGISTRY.items():
            handler = self._handlers.get(name)
            if handler is None:
                handler = self._handlers[name] = handler_cls()
            handler.set_client(self._client)

    def _reset(self) -> None:
        for handler in self._handlers.values():
            handler.set_client(None)
        self._handlers = {}
        self._client = None
        self._grant = None
        self.state = LifecycleState.UNCONFIGURED

    # ─────────────────────────────────────────────────────────────────────────
    # One-off token requests (independent of the admin session tokens)
    # ─────────────────────────────────────────────────────────────────────────
    def auth(self, credentials: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Dict[str, Any]:
        """Request a token from the current realm's token endpoint.

        The form body is built from the given fields (None values skipped);
        client_id/client_secret of the session are added when absent. The
        request carries the admin access token as a bearer header. The admin
        session's own tokens are not modified.

        Returns:
            Token response (access_token, refresh_token, expires_in, ...)

        Raises:
            KeycloakAuthenticationError: Non-2xx response from the token endpoint
        """
        self.assert_configured()
        client = self._client
        form = {key: str(value) for key, value in dict(credentials or {}, **kwargs).items() if value is not None}
        if client.client_id and "client_id" not in form:
            form["client_id"] = client.client_id
        if client.client_secret and "client_secret" not in form:
            form["client_secret"] = client.client_secret

        headers = {"Content-Type": "application/x-www-form-urlencoded"}
        access_token = client.access_token
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"

        url = f"{client.base_url}/realms/{client.realm_name}/protocol/openid-connect/token"
        return client.post_token_form(url, form, headers=headers)

    def login(self, credentials: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Dict[str, Any]:
        """Alias of auth()."""
        return self.auth(credentials, **kwargs)

    def login_pkce(
        self,
        code: Optional[str] = None,
        redirect_uri: Optional[str] = None,
        code_verifier: Optional[str] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        **extra: Any,
    ) -> Dict[str, Any]:
        """Exchange an authorization code (PKCE flow) for tokens."""
        if not code:
            raise KeycloakConfigError('login_pkce requires "code".')
        if not redirect_uri:
            raise KeycloakConfigError('login_pkce requires "redirect_uri".')
        if not code_verifier:
            raise KeycloakConfigError('login_pkce requires "code_verifier".')

        form: Dict[str, Any] = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": redirect_uri,
            "code_verifier": code_verifier,
        }
        if client_id:
            form["client_id"] = client_id
        if client_secret:
            form["client_secret"] = client_secret
        form.update(extra)
        return self.auth(form)

    def generate_authorization_url(
        self,
        redirect_uri: Optional[str] = None,
        scope: Optional[str] = None,
        state: Optional[str] = None,
    ) -> Dict[str, str]:
        """Build an authorization-code URL with a fresh PKCE pair.

        Returns:
            {"authUrl": ..., "state": ..., "codeVerifier": ...}
        """
        self.assert_configured()
        if not redirect_uri:
            raise KeycloakConfigError('generate_authorization_url requires "redirect_uri".')

        client = self._client
        verifier, challenge = pkce_pair()
        state = state or _base64url(secrets.token_bytes(32))
        query = urlencode({
            "client_id": client.client_id,
            "response_type": "code",
            "redirect_uri": redirect_uri,
            "code_challenge": challenge,
            "code_challenge_method": "S256",
            "state": state,
            "scope": scope or DEFAULT_AUTHORIZATION_SCOPE,
        })
        auth_url = f"{client.base_url}/realms/{client.realm_name}/protocol/openid-connect/auth?{query}"
        return {"authUrl": auth_url, "state": state, "codeVerifier": verifier}


# ─────────────────────────────────────────────────────────────────────────────
# Module-level default manager
# ─────────────────────────────────────────────────────────────────────────────
default_manager = KeycloakManager()


def configure(credentials: Any = None, **kwargs: Any) -> KeycloakManager:
    """Configure the default manager and return it as the session handle."""
    default_manager.configure(credentials, **kwargs)
    return default_manager


def set_config(config: Optional[Mapping[str, Any]] = None, **overrides: Any) -> None:
    default_manager.set_config(config, **overrides)


def get_token() -> TokenPair:
    return default_manager.get_token()


def stop() -> None:
    default_manager.stop()


def auth(credentials: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Dict[str, Any]:
    return default_manager.auth(credentials, **kwargs)


def login(credentials: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Dict[str, Any]:
    return default_manager.login(credentials, **kwargs)


def login_pkce(**kwargs: Any) -> Dict[str, Any]:
    return default_manager.login_pkce(**kwargs)


def generate_authorization_url(**kwargs: Any) -> Dict[str, str]:
    return default_manager.generate_authorization_url(**kwargs)
