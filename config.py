# config.py
# Runtime settings, read from the environment once at startup.

import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_COURSES_FILE = os.path.join(BASE_DIR, "courses.json")


@dataclass(frozen=True)
class Settings:
    port: int = 3001
    env: str = "development"
    courses_json_path: str = DEFAULT_COURSES_FILE
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:5173"])
    catalog_ttl_seconds: int = 3600
    max_results: int = 500
    max_courses: int = 10
    log_level: str = "INFO"

    @property
    def is_development(self) -> bool:
        return self.env == "development"


def _int(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    environ = os.environ if environ is None else environ
    origins = environ.get("CORS_ORIGIN")
    defaults = Settings()
    return Settings(
        port=_int(environ, "PORT", defaults.port),
        env=environ.get("PLANNER_ENV", defaults.env),
        courses_json_path=environ.get("COURSES_JSON_PATH", defaults.courses_json_path),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()] if origins else defaults.cors_origins,
        catalog_ttl_seconds=_int(environ, "CATALOG_TTL_SECONDS", defaults.catalog_ttl_seconds),
        max_results=_int(environ, "MAX_RESULTS", defaults.max_results),
        max_courses=_int(environ, "MAX_COURSES", defaults.max_courses),
        log_level=environ.get("LOG_LEVEL", defaults.log_level).upper(),
    )
