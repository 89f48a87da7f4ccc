import os
import tempfile
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./dev.db"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8000
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"
    RESET_DB: bool = False

    ORDER_NUMBER_PREFIX: str = "HB"
    DELIVERY_ETA_MINUTES: int = 60
    CHECKOUT_MAX_RETRIES: int = 2

    LOCK_DIR: str = os.path.join(tempfile.gettempdir(), "homebite_locks")
    LOCK_TIMEOUT_SECONDS: float = 10.0

    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
