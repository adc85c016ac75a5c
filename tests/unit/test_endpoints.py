"""Endpoint table: path resolution, query/body split and count normalization."""
import pytest

from keycloak_api_manager.core.keycloak.client import KeycloakClient
from keycloak_api_manager.core.keycloak.endpoints import Endpoint, ResourceHandler, normalize_count
from keycloak_api_manager.core.keycloak.exceptions import (
    KeycloakAPIError,
    KeycloakConfigError,
    KeycloakNotConfiguredError,
)


class WidgetHandler(ResourceHandler):
    resource = "widgets"
    base_path = "/admin/realms/{realm}/widgets"

    find = Endpoint("GET", "")
    find_one = Endpoint("GET", "/{id}", not_found=True)
    rename = Endpoint("POST", "/{id}/rename", body_keys=("newName",))
    add_tags = Endpoint("POST", "/{id}/tags", payload_key="tags")
    by_path = Endpoint("GET", "/by-path/{path}", unquoted=("path",))
    server = Endpoint("GET", "/admin/serverinfo")
    _hidden = Endpoint("GET", "/hidden")


@pytest.fixture()
def widgets():
    client = KeycloakClient("http://keycloak.test/", "master", "admin-cli")
    return WidgetHandler(client)


@pytest.mark.parametrize("value,expected", [
    (5, 5),
    ({"count": 5}, 5),
    (7.0, 7),
    ({"total": 5}, 0),
    ("5", 0),
    (None, 0),
    (True, 0),
    ({"count": "5"}, 0),
])
def test_normalize_count(value, expected):
    assert normalize_count(value) == expected


def test_realm_defaults_to_session_realm(widgets):
    path, query, body = WidgetHandler.find.resolve(widgets, {"max": 10, "search": None}, None)

    assert path == "/admin/realms/master/widgets"
    assert query == {"max": 10}
    assert body is None


def test_explicit_realm_never_leaks_into_query(widgets):
    path, query, _ = WidgetHandler.find_one.resolve(widgets, {"realm": "demo", "id": "a b/c"}, None)

    assert path == "/admin/realms/demo/widgets/a%20b%2Fc"
    assert query == {}


def test_missing_path_parameter(widgets):
    with pytest.raises(KeycloakConfigError, match="widgets.find_one: missing required parameter 'id'"):
        widgets.find_one({})


def test_payload_key_and_body_keys(widgets):
    _, query, body = WidgetHandler.add_tags.resolve(widgets, {"id": "w1", "tags": ["a"], "first": 0}, None)
    assert body == ["a"]
    assert query == {"first": 0}

    _, query, body = WidgetHandler.rename.resolve(widgets, {"id": "w1", "newName": "copy"}, None)
    assert body == {"newName": "copy"}
    assert query == {}


def test_unquoted_path_and_absolute_template(widgets):
    path, _, _ = WidgetHandler.by_path.resolve(widgets, {"path": "/parent/child"}, None)
    assert path == "/admin/realms/master/widgets/by-path/parent/child"

    path, _, _ = WidgetHandler.server.resolve(widgets, None, None)
    assert path == "/admin/serverinfo"


def test_params_are_not_mutated(widgets):
    params = {"id": "w1", "newName": "copy"}

    WidgetHandler.rename.resolve(widgets, params, None)

    assert params == {"id": "w1", "newName": "copy"}


def test_not_found_returns_none(widgets, keycloak_stub):
    keycloak_stub.route("GET", "/admin/realms/master/widgets/missing", {"error": "not found"}, status_code=404)
    keycloak_stub.route("GET", "/admin/realms/master/widgets", {"error": "not found"}, status_code=404)

    assert widgets.find_one({"id": "missing"}) is None
    with pytest.raises(KeycloakAPIError):
        widgets.find()


def test_unbound_handler_raises():
    with pytest.raises(KeycloakNotConfiguredError):
        WidgetHandler().find()


def test_operations_listing_skips_private_entries():
    operations = WidgetHandler.operations()

    assert {"find", "find_one", "rename", "add_tags", "by_path", "server"} == set(operations)
    assert operations["rename"].method == "POST"
    assert WidgetHandler().find.__name__ == "find"
