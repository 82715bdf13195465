from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    APP_NAME: str = "Trailmart Catalog"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Snapshot persistence: memory | file | redis
    SNAPSHOT_BACKEND: str = "file"
    SNAPSHOT_PATH: str = "data/marketplace-storage.json"
    SNAPSHOT_KEY: str = "marketplace-storage"
    REDIS_URL: str = "redis://localhost:6379/0"

    # Premium boost
    PREMIUM_BOOST_DAYS: int = 7

    # Content moderation
    MODERATION_ENABLE_AI: bool = True
    MODERATION_ENABLE_KEYWORD_FILTERING: bool = True
    MODERATION_ENABLE_DOMAIN_FILTERING: bool = True
    MODERATION_TRUSTED_DOMAINS: list[str] = [
        "images.unsplash.com",
        "via.placeholder.com",
        "picsum.photos",
        "source.unsplash.com",
    ]
    MODERATION_MAX_CALLS_PER_MINUTE: int = 10
    MODERATION_MAX_CALLS_PER_HOUR: int = 100
    MODERATION_CLASSIFIER_TIMEOUT_SECONDS: float = 10.0
    MODERATION_BATCH_CONCURRENCY: int = 8

    # External text classifier (OpenAI-compatible); unset → external tier unavailable
    CLASSIFIER_BASE_URL: str | None = None
    CLASSIFIER_API_KEY: str | None = None
    CLASSIFIER_MODEL: str = "gpt-4o-mini"


settings = Settings()
