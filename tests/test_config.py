import pytest

from config import DEFAULT_COURSES_FILE, load_settings


def test_defaults():
    settings = load_settings({})
    assert settings.port == 3001
    assert settings.courses_json_path == DEFAULT_COURSES_FILE
    assert settings.catalog_ttl_seconds == 3600
    assert settings.max_results == 500
    assert settings.max_courses == 10
    assert settings.is_development


def test_environment_overrides():
    settings = load_settings({
        "PORT": "8080",
        "PLANNER_ENV": "production",
        "CORS_ORIGIN": "https://a.example, https://b.example",
        "CATALOG_TTL_SECONDS": "60",
        "LOG_LEVEL": "debug",
    })
    assert settings.port == 8080
    assert settings.cors_origins == ["https://a.example", "https://b.example"]
    assert settings.catalog_ttl_seconds == 60
    assert settings.log_level == "DEBUG"
    assert not settings.is_development


def test_malformed_number():
    with pytest.raises(ValueError, match="PORT"):
        load_settings({"PORT": "eighty"})
