import logging

import pytest

from gridsheets.core.config import DEFAULT_JWT_SECRET, Settings
from gridsheets.main import create_app

from conftest import make_settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("APP_MONGO_URI", "MONGO_URI", "APP_JWT_SECRET", "JWT_SECRET", "APP_SESSION_SECRET", "SESSION_SECRET"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_unprefixed_environment_names_are_read(clean_env):
    clean_env.setenv("JWT_SECRET", "prod-secret")
    clean_env.setenv("MONGO_URI", "mongodb://prod:27017")
    clean_env.setenv("SESSION_SECRET", "prod-session")
    settings = Settings(_env_file=None)
    assert settings.jwt_secret == "prod-secret"
    assert settings.mongo_uri == "mongodb://prod:27017"
    assert settings.session_secret == "prod-session"
    assert settings.default_secrets_in_use() == []


def test_prefixed_names_win(clean_env):
    clean_env.setenv("APP_JWT_SECRET", "prefixed")
    clean_env.setenv("JWT_SECRET", "plain")
    assert Settings(_env_file=None).jwt_secret == "prefixed"


def test_dotenv_file_is_read(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("MONGO_URI=mongodb://from-dotenv:27017\nJWT_SECRET=dotenv-secret\nUNRELATED=1\n")
    settings = Settings(_env_file=str(env_file))
    assert settings.mongo_uri == "mongodb://from-dotenv:27017"
    assert settings.jwt_secret == "dotenv-secret"


def test_field_names_still_accepted_as_arguments():
    settings = Settings(_env_file=None, jwt_secret="given", mongo_uri="mongodb://given:27017")
    assert settings.jwt_secret == "given"
    assert settings.mongo_uri == "mongodb://given:27017"


def test_default_secret_is_reported_at_startup(caplog):
    settings = make_settings(jwt_secret=DEFAULT_JWT_SECRET)
    with caplog.at_level(logging.WARNING, logger="gridsheets"):
        create_app(settings)
    assert "default_secret_in_use" in caplog.text
    assert "jwt_secret" in caplog.text


def test_configured_secrets_are_not_reported(caplog):
    with caplog.at_level(logging.WARNING, logger="gridsheets"):
        create_app(make_settings())
    assert "default_secret_in_use" not in caplog.text
