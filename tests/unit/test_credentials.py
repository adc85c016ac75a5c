import pytest

from keycloak_api_manager.core.keycloak.credentials import AdminCredentials, GrantCredentials, to_snake_case
from keycloak_api_manager.core.keycloak.exceptions import KeycloakConfigError


def test_camel_case_keys_are_accepted(admin_config):
    creds = AdminCredentials.from_mapping(admin_config)

    assert creds.base_url == "http://keycloak.test"
    assert creds.realm_name == "master"
    assert creds.client_id == "admin-cli"
    assert creds.token_life_span == 90
    assert creds.grant.grant_type == "password"
    assert creds.grant.username == "admin"


def test_token_lifespan_spelling_alias():
    creds = AdminCredentials.from_mapping({
        "base_url": "http://kc", "realm_name": "master", "client_id": "svc",
        "grant_type": "client_credentials", "tokenLifespan": "120",
    })

    assert creds.token_life_span == "120"


def test_missing_required_keys():
    with pytest.raises(KeycloakConfigError, match="base_url"):
        AdminCredentials.from_mapping({"realmName": "master", "clientId": "admin-cli"})


def test_unknown_keys_are_rejected(admin_config):
    admin_config["colour"] = "blue"

    with pytest.raises(KeycloakConfigError, match="colour"):
        AdminCredentials.from_mapping(admin_config)


def test_grant_validation():
    with pytest.raises(KeycloakConfigError):
        GrantCredentials(grant_type="password", username="admin").validate()
    with pytest.raises(KeycloakConfigError):
        GrantCredentials(grant_type="refresh_token").validate()
    GrantCredentials(grant_type="client_credentials").validate()


def test_offline_token_adds_offline_access_scope():
    grant = GrantCredentials(username="a", password="b", scope="openid", offline_token=True, totp="123456")

    form = grant.form_fields()

    assert form["scope"] == "openid offline_access"
    assert form["totp"] == "123456"
    assert "refresh_token" not in form


def test_to_snake_case():
    assert to_snake_case("realmName") == "realm_name"
    assert to_snake_case("grant_type") == "grant_type"
    assert to_snake_case("tokenLifeSpan") == "token_life_span"
