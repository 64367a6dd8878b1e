import pytest

import config


def test_token_required(monkeypatch):
    monkeypatch.delenv("WEBZIO_API_TOKEN", raising=False)
    monkeypatch.delenv("WEBZ_API_TOKEN", raising=False)
    with pytest.raises(config.ConfigError):
        config.api_token()


def test_token_fallback_name(monkeypatch):
    monkeypatch.delenv("WEBZIO_API_TOKEN", raising=False)
    monkeypatch.setenv("WEBZ_API_TOKEN", "abc")
    assert config.api_token() == "abc"


def test_database_url_defaults(monkeypatch):
    for name in ("DATABASE_URL", "DB_HOST", "DB_PORT", "DB_USER", "DB_PASSWORD", "DB_NAME"):
        monkeypatch.delenv(name, raising=False)
    url = config.database_url()
    assert url.drivername == "postgresql+psycopg2"
    assert url.host == "localhost"
    assert url.port == 5432
    assert url.username == "postgres"
    assert url.database == "webz_data"


def test_database_url_override(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///webz.db")
    assert config.database_url() == "sqlite:///webz.db"


def test_base_url_default(monkeypatch):
    monkeypatch.delenv("WEBZ_API_BASE_URL", raising=False)
    assert config.api_base_url() == "https://api.webz.io"
