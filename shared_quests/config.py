"""Application configuration loaded from environment variables and .env file."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    DATABASE_URL: str = "sqlite:///./sharedquests.db"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Game server data
    PROFILES_DIR: str = "user/profiles"
    QUESTS_PATH: str = "database/templates/quests.json"
    LOCALES_DIR: Optional[str] = "database/locales/global"
    LOCALE: str = "en"

    # Client polling
    SERVER_URL: str = "http://127.0.0.1:6969"
    CACHE_DURATION_SECONDS: int = 5


settings = Settings()
