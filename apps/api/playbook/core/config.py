from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env from apps/api so it works regardless of CWD
_env_file = Path(__file__).resolve().parent.parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=_env_file, extra="ignore")

    database_url: str = "postgresql://localhost/playbook"
    sql_echo: bool = False
    sql_null_pool: bool = False

    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60

    # Elasticsearch (search projection of users, tags and pickup lines)
    elasticsearch_host: str = "https://localhost:9200"
    elasticsearch_username: str | None = None
    elasticsearch_password: str | None = None
    elasticsearch_ca_cert_path: str | None = None
    pickup_line_index_name: str = "pickup-lines"
    tag_index_name: str = "tags"
    user_index_name: str = "users"

    items_per_page: int = 10
    # None => engine default (1 when a bool query has only should clauses, else 0)
    search_minimum_should_match: int | None = None
    # RANDOM ordering is stable for a given seed and index state
    search_random_seed: int = 0

    search_rate_limit: str = "30/minute"

    # CORS (comma-separated origins; * allows all)
    cors_origins: str = "*"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parsed CORS origins for middleware."""
        raw = self.cors_origins.strip()
        return ["*"] if not raw else [o.strip() for o in raw.split(",") if o.strip()]

    @property
    def async_database_url(self) -> str:
        """Database URL rewritten for the asyncpg driver when given as plain postgres."""
        url = self.database_url
        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)
        if url.startswith("postgresql://") and "asyncpg" not in url:
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url


@lru_cache
def get_settings() -> Settings:
    return Settings()
