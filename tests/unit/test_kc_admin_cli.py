import json

import pytest

from keycloak_api_manager.core.keycloak import KeycloakManager
from scripts import kc_admin


@pytest.fixture()
def cli_env(monkeypatch, tmp_path):
    monkeypatch.setenv("KEYCLOAK_URL", "http://keycloak.test")
    monkeypatch.setenv("KEYCLOAK_REALM", "master")
    monkeypatch.setenv("KEYCLOAK_ADMIN", "admin")
    monkeypatch.setenv("KEYCLOAK_ADMIN_PASSWORD", "admin")
    monkeypatch.delenv("KEYCLOAK_GRANT_TYPE", raising=False)
    monkeypatch.delenv("KEYCLOAK_CLIENT_SECRET", raising=False)


@pytest.fixture()
def cli_manager(manual_scheduler):
    return KeycloakManager(scheduler_factory=manual_scheduler)


def test_token_command(cli_env, cli_manager, capsys):
    assert kc_admin.main(["token"], manager=cli_manager) == 0

    out = json.loads(capsys.readouterr().out)
    assert out == {"access_token": "access-1", "refresh_token": "refresh-1"}
    assert cli_manager.scheduler is None


def test_call_command(cli_env, cli_manager, keycloak_stub, capsys):
    keycloak_stub.route("GET", "/admin/realms/demo/users", [{"id": "u1"}])

    code = kc_admin.main(
        ["--target-realm", "demo", "call", "users", "find", "--param", "username=alice"],
        manager=cli_manager,
    )

    assert code == 0
    assert json.loads(capsys.readouterr().out) == [{"id": "u1"}]
    assert keycloak_stub.api_calls[-1][2]["params"] == {"username": "alice"}


def test_call_command_with_payload(cli_env, cli_manager, keycloak_stub):
    keycloak_stub.route("POST", "/admin/realms/master/groups", status_code=201)

    assert kc_admin.main(["call", "groups", "create", "--payload", '{"name": "ops"}'], manager=cli_manager) == 0
    assert json.loads(keycloak_stub.api_calls[-1][2]["data"]) == {"name": "ops"}


def test_api_error_exits_nonzero(cli_env, cli_manager, keycloak_stub, capsys):
    keycloak_stub.route("GET", "/admin/realms/master/groups/g1/members", {"error": "Could not find group by id"}, status_code=404)

    code = kc_admin.main(["call", "groups", "list_members", "--param", "id=g1"], manager=cli_manager)

    assert code == 1
    assert "HTTP 404 Could not find group by id" in capsys.readouterr().err


def test_unknown_operation(cli_env, cli_manager):
    with pytest.raises(SystemExit):
        kc_admin.main(["call", "groups", "explode"], manager=cli_manager)


def test_operations_listing(capsys):
    assert kc_admin.main(["operations", "server_info"]) == 0
    assert "get_info" in capsys.readouterr().out
