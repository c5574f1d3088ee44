# arab_insights/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    ENV: str = "local"
    LOG_LEVEL: str = "INFO"

    SERVICE_NAME: str | None = None

    # Either a full SQLAlchemy URL or the POSTGRES_* parts
    DATABASE_URL: str | None = None
    POSTGRES_USER: str | None = None
    POSTGRES_PASSWORD: str | None = None
    POSTGRES_DB: str | None = None
    POSTGRES_HOST: str | None = None
    POSTGRES_PORT: int | None = None

    AUTO_CREATE_TABLES: bool = False  # alembic owns the schema outside local/test
    DB_CONNECT_RETRIES: int = 10
    DB_CONNECT_DELAY_SECONDS: float = 3.0

    # Hugging Face inference endpoints (can be overridden in system_settings)
    HF_SENTIMENT_ENDPOINT: str | None = None
    HF_SUMMARY_ENDPOINT: str | None = None
    HF_API_TOKEN: str | None = None
    HF_MODEL_SOURCE: str = "MARBERT"
    HF_TIMEOUT_SECONDS: float = 30.0

    MAX_TEXT_LENGTH: int = 5000
    STRICT_SENTIMENT_PARSING: bool = False
    NLTK_STOPWORDS: bool = True  # off in tests / air-gapped deploys

    BATCH_CONCURRENCY: int = 4
    BATCH_MAX_ARTICLES: int = 20

    RATE_LIMIT_ENABLED: bool = True
    ANALYZE_RATE_LIMIT: str = "60/minute"

    FRONTEND_ORIGIN: str | None = None
    ADMIN_API_KEY: str | None = None

    BETTERSTACK_API_KEY: str | None = None  # PRODUCTION MODE ONLY
    BETTERSTACK_HOST: str | None = None  # PRODUCTION MODE ONLY

    OTEL_ENABLED: bool = False
    OTEL_SERVICE_NAME: str = "arab-insights"
    OTEL_SERVICE_VERSION: str = "1.0.0"
    OTEL_SAMPLE_RATIO: str | None = None
    OTEL_ENABLE_METRICS: str | None = None

    model_config = SettingsConfigDict(
        env_file=None,
        env_file_encoding="utf-8",
    )

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if not (self.POSTGRES_USER and self.POSTGRES_HOST and self.POSTGRES_DB):
            raise RuntimeError(
                "Database is not configured: set DATABASE_URL or POSTGRES_* variables."
            )
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT or 5432}/{self.POSTGRES_DB}"
        )


settings = Settings()
