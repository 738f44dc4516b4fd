"""
Application Configuration

Centralized settings management using Pydantic BaseSettings.
All values are loaded from environment variables or .env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable binding.

    Optional env vars:
        STORE_BACKEND (redis), STORE_KEY_PREFIX (""),
        REDIS_HOST (redis), REDIS_PORT (6379), REDIS_DB (0),
        POSTGRES_* (only read by the sql backend),
        GEMINI_API_KEY (unset = AI degraded mode), GEMINI_MODEL, AI_TIMEOUT,
        LOG_LEVEL (INFO)
    """

    PROJECT_NAME: str = "NeoNotes"

    # Persisted store: "memory", "redis" or "sql"
    STORE_BACKEND: str = "redis"
    STORE_KEY_PREFIX: str = ""

    # Redis
    REDIS_HOST: str = "redis"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0

    # Database (sql backend)
    POSTGRES_USER: str = "neonotes"
    POSTGRES_PASSWORD: str = "neonotes"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "neonotes"

    # AI collaborator (Gemini generateContent API)
    GEMINI_API_KEY: str | None = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    AI_TIMEOUT: float = 30.0

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",  # Silently ignore unknown env vars
    )

    @property
    def DATABASE_URL(self) -> str:
        """Async PostgreSQL connection string using asyncpg driver."""
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def REDIS_URL(self) -> str:
        """Redis connection string."""
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"


settings = Settings()
