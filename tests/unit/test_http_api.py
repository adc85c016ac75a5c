"""Direct REST helper: status handling, headers and error extraction."""
import json

import pytest

from keycloak_api_manager.core.keycloak.exceptions import KeycloakAPIError
from keycloak_api_manager.core.keycloak.http_api import build_url, make_request, parse_error_body


def test_no_content_returns_none(keycloak_stub, base_url):
    keycloak_stub.route("DELETE", "/admin/realms/demo/users/u1", status_code=204)

    assert make_request(base_url, "tok", "DELETE", "/admin/realms/demo/users/u1") is None


def test_json_body_is_decoded(keycloak_stub, base_url):
    keycloak_stub.route("GET", "/admin/realms/demo/users", [{"id": "u1"}])

    assert make_request(base_url, "tok", "get", "/admin/realms/demo/users") == [{"id": "u1"}]
    method, url, kwargs = keycloak_stub.calls[-1]
    assert method == "GET"
    assert url == f"{base_url}/admin/realms/demo/users"
    assert kwargs["headers"]["Authorization"] == "Bearer tok"
    assert "Content-Type" not in kwargs["headers"]
    assert kwargs["timeout"] == 30


def test_error_description_becomes_message(keycloak_stub, base_url):
    keycloak_stub.route("POST", "/admin/realms/demo/users", {"error_description": "bad request"}, status_code=400)

    with pytest.raises(KeycloakAPIError) as excinfo:
        make_request(base_url, "tok", "POST", "/admin/realms/demo/users", body={"username": "x"})

    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "bad request"
    assert str(excinfo.value) == "bad request"
    assert excinfo.value.endpoint == f"{base_url}/admin/realms/demo/users"


def test_error_message_fallbacks(keycloak_stub, base_url):
    keycloak_stub.route("GET", "/a", {"errorMessage": "User exists with same username"}, status_code=409)
    keycloak_stub.route("GET", "/b", text="<html>gateway</html>", status_code=502)
    keycloak_stub.route("GET", "/c", status_code=500)

    with pytest.raises(KeycloakAPIError, match="User exists"):
        make_request(base_url, "tok", "GET", "/a")
    with pytest.raises(KeycloakAPIError) as excinfo:
        make_request(base_url, "tok", "GET", "/b")
    assert excinfo.value.response == {"message": "<html>gateway</html>"}
    with pytest.raises(KeycloakAPIError, match="HTTP 500"):
        make_request(base_url, "tok", "GET", "/c")


def test_body_query_and_request_options(keycloak_stub, base_url):
    keycloak_stub.route("PUT", "/admin/realms/demo/groups/g1", status_code=204)

    make_request(
        base_url,
        "tok",
        "PUT",
        "/admin/realms/demo/groups/g1",
        body={"name": "ops"},
        params={"first": 0, "max": None},
        request_options={"timeout": 5, "verify": False, "headers": {"X-Trace": "1"}},
    )

    _, _, kwargs = keycloak_stub.calls[-1]
    assert json.loads(kwargs["data"]) == {"name": "ops"}
    assert kwargs["params"] == {"first": 0}
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert kwargs["headers"]["X-Trace"] == "1"
    assert kwargs["timeout"] == 5
    assert kwargs["verify"] is False


def test_text_plain_body_is_sent_verbatim(keycloak_stub, base_url):
    keycloak_stub.route("PUT", "/p", status_code=204)

    make_request(base_url, "tok", "PUT", "/p", body="My phone", content_type="text/plain")

    _, _, kwargs = keycloak_stub.calls[-1]
    assert kwargs["data"] == "My phone"
    assert kwargs["headers"]["Content-Type"] == "text/plain"


def test_raw_returns_bytes(keycloak_stub, base_url):
    keycloak_stub.route("GET", "/cert", text="-----BEGIN-----")

    assert make_request(base_url, "tok", "GET", "/cert", raw=True) == b"-----BEGIN-----"


def test_build_url_and_error_body_parsing():
    assert build_url("http://kc/", "admin/realms") == "http://kc/admin/realms"
    assert parse_error_body("") == {}
    assert parse_error_body("[1, 2]") == {"message": "[1, 2]"}
    assert parse_error_body('{"error": "x"}') == {"error": "x"}
