import pytest

from leaveflow.config.settings import Settings


def test_production_requires_jwt_secret(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    with pytest.raises(ValueError):
        Settings(ENVIRONMENT="production", LOG_TO_FILE=False)


def test_production_accepts_configured_secret():
    settings = Settings(ENVIRONMENT="production", JWT_SECRET_KEY="configured-secret", LOG_TO_FILE=False)
    assert settings.JWT_SECRET_KEY == "configured-secret"


def test_jwt_secret_read_from_environment(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "from-env")
    settings = Settings(ENVIRONMENT="production", LOG_TO_FILE=False)
    assert settings.JWT_SECRET_KEY == "from-env"


def test_development_generates_secret(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    settings = Settings(ENVIRONMENT="development", LOG_TO_FILE=False)
    assert len(settings.JWT_SECRET_KEY) == 32


def test_bcrypt_rounds_from_original_env_name(monkeypatch):
    monkeypatch.setenv("BCRYPT_SALT_ROUNDS", "12")
    settings = Settings(LOG_TO_FILE=False)
    assert settings.PASSWORD_BCRYPT_ROUNDS == 12
