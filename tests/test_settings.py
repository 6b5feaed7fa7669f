import pytest
from app.core.settings import DEFAULT_API_URL, load_settings

ENV_VARS = [
    "SWAPI_URL",
    "CATALOG_CONNECT_TIMEOUT_SEC",
    "CATALOG_READ_TIMEOUT_SEC",
    "SEARCH_DEBOUNCE_SEC",
    "GALLERY_CACHE_SIZE",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = load_settings()

    assert settings.api_url == DEFAULT_API_URL
    assert settings.connect_timeout_sec == 0.5
    assert settings.read_timeout_sec == 5.0
    assert settings.debounce_sec == 0.3
    assert settings.cache_size == 0
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SWAPI_URL", "http://localhost:9000/api/people/")
    monkeypatch.setenv("CATALOG_READ_TIMEOUT_SEC", "2.5")
    monkeypatch.setenv("SEARCH_DEBOUNCE_SEC", "0.1")
    monkeypatch.setenv("GALLERY_CACHE_SIZE", "32")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.api_url == "http://localhost:9000/api/people/"
    assert settings.read_timeout_sec == 2.5
    assert settings.debounce_sec == 0.1
    assert settings.cache_size == 32
    assert settings.log_level == "DEBUG"


def test_malformed_numbers_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("CATALOG_CONNECT_TIMEOUT_SEC", "fast")
    monkeypatch.setenv("GALLERY_CACHE_SIZE", "lots")

    settings = load_settings()

    assert settings.connect_timeout_sec == 0.5
    assert settings.cache_size == 0


def test_negative_cache_size_disables_cache(monkeypatch):
    monkeypatch.setenv("GALLERY_CACHE_SIZE", "-5")
    assert load_settings().cache_size == 0


def test_blank_url_uses_default(monkeypatch):
    monkeypatch.setenv("SWAPI_URL", "   ")
    assert load_settings().api_url == DEFAULT_API_URL
