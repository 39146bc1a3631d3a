# looproute/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables (.env file).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    APP_NAME: str = "Loop Route Engine API"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Directions provider (Google Directions compatible). Without a key the
    # engine runs offline and every candidate is a mock route.
    DIRECTIONS_API_KEY: str = ""
    DIRECTIONS_BASE_URL: str = "https://maps.googleapis.com/maps/api"
    DIRECTIONS_MODE: str = "walking"
    DIRECTIONS_TIMEOUT_S: float = 15.0

    # Open-Elevation compatible lookup endpoint; empty disables it.
    ELEVATION_URL: str = ""
    ELEVATION_TIMEOUT_S: float = 10.0
    ELEVATION_SAMPLE_SIZE: int = 64

    MAX_ROUTES: int = 3


settings = Settings()
