"""Settings loading and validation tests."""

import pytest

from image_studio.core.config import BaseAppSettings, Settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "DATABASE_URL",
        "DATABASE_AUTH_TOKEN",
        "PINATA_JWT",
        "REPLICATE_API_TOKEN",
        "CORS_ORIGINS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("APP_ENV", "test")
    return monkeypatch


def test_optional_integrations_default_to_disabled(clean_env):
    settings = Settings(_env_file=None)  # type: ignore[call-arg]

    assert settings.database_configured is False
    assert settings.mirroring_enabled is False
    assert settings.pinata_gateway == "gateway.pinata.cloud"


def test_database_and_mirror_configuration_from_env(clean_env):
    clean_env.setenv("DATABASE_URL", "sqlite+aiosqlite:///./history.db")
    clean_env.setenv("PINATA_JWT", "jwt")

    settings = Settings(_env_file=None)  # type: ignore[call-arg]

    assert settings.database_configured is True
    assert settings.mirroring_enabled is True


def test_cors_origins_list(clean_env):
    clean_env.setenv("CORS_ORIGINS", "http://a.test, http://b.test")

    settings = Settings(_env_file=None)  # type: ignore[call-arg]

    assert settings.cors_origins_list == ["http://a.test", "http://b.test"]


def test_missing_replicate_token_fails_outside_tests(clean_env):
    clean_env.setenv("APP_ENV", "production")

    with pytest.raises(ValueError, match="REPLICATE_API_TOKEN"):
        Settings(_env_file=None)  # type: ignore[call-arg]


def test_database_is_optional_outside_tests(clean_env):
    clean_env.setenv("APP_ENV", "production")
    clean_env.setenv("REPLICATE_API_TOKEN", "r8_token")

    settings = Settings(_env_file=None)  # type: ignore[call-arg]

    assert settings.database_configured is False


def test_base_settings_do_not_require_replicate_token(clean_env):
    clean_env.setenv("APP_ENV", "production")
    clean_env.setenv("DATABASE_URL", "sqlite+aiosqlite:///./history.db")

    settings = BaseAppSettings(_env_file=None)  # type: ignore[call-arg]

    assert settings.database_configured is True
    assert settings.replicate_api_token == ""
