from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite+aiosqlite:///./blog.db"
    db_echo: bool = False
    db_timeout: float = 5.0

    # Entorno
    env: str = "dev"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # Lectura
    words_per_minute: int = 200

    # Autor por defecto (no hay auth)
    author_name: str = "Admin"
    author_email: str = "admin@example.com"
    author_avatar: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def database_url_sync(self) -> str:
        """Same URL with the sync driver, for Alembic."""
        return (
            self.database_url
            .replace("+aiosqlite", "")
            .replace("+asyncpg", "+psycopg2")
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
