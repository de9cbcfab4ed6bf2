import os
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    POSTGRES_HOST: str = os.getenv("POSTGRES_HOST", "localhost:5432")
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "postgres")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "<PASSWORD>")
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "rocketfist")
    DATABASE_URL: Optional[str] = None

    ENVIRONMENT: str = "production"
    # Role used when no X-Gym-Role header is sent (dev only)
    DEV_ROLE: str = "owner"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    DEFAULT_CURRENCY: str = "USD"

    DEFAULT_CLASS_CAPACITY: int = 20
    LARGE_CLASS_CAPACITY: int = 30
    LARGE_CAPACITY_DISCIPLINES: List[str] = ["bjj"]

    ENFORCE_CHECK_IN_AFTER_START: bool = False

    model_config = SettingsConfigDict(env_file=os.getenv("ENV_FILE", ".env"), extra="ignore")

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}/{self.POSTGRES_DB}"


# Loaded once at import
config = Config()
