import pytest

from app.core import config

def test_test_environment_passes():
    config.validate_config()

def test_production_rejects_default_secret(monkeypatch):
    monkeypatch.setattr(config.settings, "ENVIRONMENT", "production")
    monkeypatch.setattr(config.settings, "SECRET_KEY", config.DEFAULT_SECRET_KEY)

    with pytest.raises(ValueError, match="SECRET_KEY"):
        config.validate_config()

def test_production_rejects_short_secret_and_debug(monkeypatch):
    monkeypatch.setattr(config.settings, "ENVIRONMENT", "production")
    monkeypatch.setattr(config.settings, "SECRET_KEY", "short")
    with pytest.raises(ValueError, match="32 bytes"):
        config.validate_config()

    monkeypatch.setattr(config.settings, "SECRET_KEY", "x" * 40)
    monkeypatch.setattr(config.settings, "DEBUG", True)
    with pytest.raises(ValueError, match="DEBUG"):
        config.validate_config()

def test_non_positive_expiry_is_rejected(monkeypatch):
    monkeypatch.setattr(config.settings, "ACCESS_TOKEN_EXPIRE_MINUTES", 0)

    with pytest.raises(ValueError, match="ACCESS_TOKEN_EXPIRE_MINUTES"):
        config.validate_config()
