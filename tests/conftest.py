"""Pytest shared fixtures: stubbed Keycloak HTTP surface and a manual scheduler."""
import json
import pathlib
import sys
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlsplit

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests

from keycloak_api_manager.core.keycloak import KeycloakManager

BASE_URL = "http://keycloak.test"

ADMIN_CONFIG = {
    "baseUrl": BASE_URL,
    "realmName": "master",
    "clientId": "admin-cli",
    "grantType": "password",
    "username": "admin",
    "password": "admin",
    "tokenLifeSpan": 90,
}


class StubResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, text: Optional[str] = None):
        self.status_code = status_code
        if text is None:
            text = "" if payload is None else json.dumps(payload)
        self.text = text
        self.content = text.encode()

    def json(self):
        return json.loads(self.text)


class StubKeycloak:
    """Stands in for requests.post / requests.request and records every call.

    Token requests get a fresh numbered token pair unless responses are queued
    in ``token_responses``. Admin calls are answered from ``routes`` keyed by
    (METHOD, path).
    """

    def __init__(self):
        self.calls: List[Tuple[str, str, Dict[str, Any]]] = []
        self.token_responses: List[StubResponse] = []
        self.routes: Dict[Tuple[str, str], StubResponse] = {}
        self.issued = 0

    def route(self, method: str, path: str, payload: Any = None, status_code: int = 200, text: Optional[str] = None) -> None:
        self.routes[(method.upper(), path)] = StubResponse(payload, status_code, text)

    def post(self, url, data=None, headers=None, **kwargs):
        self.calls.append(("POST", url, {"data": data, "headers": headers, **kwargs}))
        if url.endswith("/protocol/openid-connect/token"):
            if self.token_responses:
                return self.token_responses.pop(0)
            self.issued += 1
            return StubResponse({
                "access_token": f"access-{self.issued}",
                "refresh_token": f"refresh-{self.issued}",
                "expires_in": 60,
            })
        raise RuntimeError(f"Unexpected HTTP POST in unit test: {url}")

    def request(self, method, url, params=None, data=None, headers=None, **kwargs):
        self.calls.append((method, url, {"params": params, "data": data, "headers": headers, **kwargs}))
        key = (method, urlsplit(url).path)
        if key in self.routes:
            return self.routes[key]
        raise RuntimeError(f"Unexpected HTTP {method} in unit test: {url}")

    @property
    def token_calls(self):
        return [call for call in self.calls if call[1].endswith("/protocol/openid-connect/token")]

    @property
    def api_calls(self):
        return [call for call in self.calls if not call[1].endswith("/protocol/openid-connect/token")]


class ManualScheduler:
    """Scheduler double: never starts a thread, ticks on demand."""

    created: List["ManualScheduler"] = []

    def __init__(self, callback, interval_ms, on_error=None, name="manual"):
        self.callback = callback
        self.interval_ms = interval_ms
        self.on_error = on_error
        self.started = False
        self.cancelled = False
        ManualScheduler.created.append(self)

    @property
    def active(self):
        return self.started and not self.cancelled

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def tick(self):
        try:
            self.callback()
        except Exception as exc:
            if self.on_error is None:
                raise
            self.on_error(exc)


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def keycloak_stub(monkeypatch):
    """Prevent unit tests from hitting a live Keycloak."""
    stub = StubKeycloak()
    monkeypatch.setattr(requests, "post", stub.post)
    monkeypatch.setattr(requests, "request", stub.request)
    return stub


@pytest.fixture()
def manual_scheduler():
    ManualScheduler.created = []
    return ManualScheduler


@pytest.fixture()
def manager(manual_scheduler):
    """Unconfigured manager wired to the manual scheduler."""
    return KeycloakManager(scheduler_factory=manual_scheduler)


@pytest.fixture()
def configured(manager):
    """Manager after a successful configure() against the stub."""
    manager.configure(ADMIN_CONFIG)
    return manager


@pytest.fixture()
def admin_config():
    return dict(ADMIN_CONFIG)


@pytest.fixture()
def base_url():
    return BASE_URL
