import os
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
import logging

# Load environment variables from the project .env if one is present
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), ".env"))

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    POSTGRES_URI: str
    HOST: str = "127.0.0.1"
    PORT: int = 8082
    ENV: str = "development"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None  # e.g. "logs/app.log" for a rolling file sink

    # Connection pool
    DB_POOL_MAX_CONNECTIONS: int = 10
    DB_POOL_MIN_CONNECTIONS: int = 2
    DB_POOL_ACQUIRE_TIMEOUT: int = 5  # seconds
    DB_POOL_IDLE_TIMEOUT: int = 600  # seconds
    DB_ECHO: bool = False
    AUTO_CREATE_TABLES: bool = False

    CORS_ORIGINS: List[str] = ["*"]

    # Review workflow
    REVIEWER_NAME_FALLBACK: Optional[str] = None  # None means reviewer_name is mandatory
    PENDING_REVIEWS_DEFAULT_LIMIT: int = 50
    PENDING_REVIEWS_MAX_LIMIT: int = 100

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.DB_POOL_MIN_CONNECTIONS > self.DB_POOL_MAX_CONNECTIONS:
            raise ValueError("DB_POOL_MIN_CONNECTIONS cannot exceed DB_POOL_MAX_CONNECTIONS")
        logger.info(f"Settings loaded for ENV={self.ENV}, binding {self.HOST}:{self.PORT}")
        logger.info(
            f"Pool sizing - min: {self.DB_POOL_MIN_CONNECTIONS}, max: {self.DB_POOL_MAX_CONNECTIONS}, "
            f"acquire timeout: {self.DB_POOL_ACQUIRE_TIMEOUT}s"
        )


settings = Settings()
