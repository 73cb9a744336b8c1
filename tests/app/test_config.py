"""Tests for Settings helpers."""

from tests.conftest import make_settings


def test_admin_credentials_configured():
    settings = make_settings(admin_login="root", admin_password="pw")
    assert settings.admin_credentials == ("root", "pw")


def test_admin_credentials_dev_fallback_outside_production():
    settings = make_settings(environment="development", admin_login="", admin_password="")
    assert settings.admin_credentials == ("admin", "admin")


def test_admin_credentials_disabled_in_production():
    settings = make_settings(environment="production", admin_login="", admin_password="")
    assert settings.is_production
    assert settings.admin_credentials == ("", "")


def test_admin_credentials_production_with_dev_fallback():
    settings = make_settings(
        environment="production",
        admin_login="",
        admin_password="",
        auth_dev_fallback=True,
    )
    assert settings.admin_credentials == ("admin", "admin")


def test_cors_origin_list():
    settings = make_settings(cors_origins=" https://a.example, ,https://b.example")
    assert settings.cors_origin_list == ["https://a.example", "https://b.example"]
    assert make_settings().cors_origin_list == []


def test_database_url_obj():
    settings = make_settings(database_url="postgresql://u:p@db:5432/historico")
    assert settings.database_url_obj.host == "db"
    assert settings.database_url_obj.get_backend_name() == "postgresql"
