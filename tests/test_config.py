import pytest

import config
from config import load_settings


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda: False)
    for name in ("GEMINI_API_KEY", "GOOGLE_MAPS_API_KEY", "GEMINI_MODEL", "PORT", "APP_ENV", "CACHE_TTL"):
        monkeypatch.delenv(name, raising=False)


def test_missing_secrets_fail_fast(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "gemini-key")

    with pytest.raises(ValueError) as exc_info:
        load_settings()

    assert "GOOGLE_MAPS_API_KEY" in str(exc_info.value)
    assert "GEMINI_API_KEY," not in str(exc_info.value)


def test_defaults(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "gemini-key")
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "maps-key")

    settings = load_settings()

    assert settings.gemini_api_key == "gemini-key"
    assert settings.google_maps_api_key == "maps-key"
    assert settings.port == 3000
    assert settings.cache_ttl == 300
    assert settings.self_hosted is True


def test_overrides(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "gemini-key")
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "maps-key")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CACHE_TTL", "60")
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-2.0-flash")

    settings = load_settings()

    assert settings.port == 8080
    assert settings.cache_ttl == 60
    assert settings.gemini_model == "gemini-2.0-flash"
    assert settings.self_hosted is False
