#!/usr/bin/env python3
"""
Application configuration with environment variables
"""

import os
from typing import Optional
from pydantic import BaseModel


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """Application settings"""

    # Database Configuration
    DB_HOST: str = os.getenv("DB_HOST", "127.0.0.1")
    DB_PORT: str = os.getenv("DB_PORT", "5432")
    DB_USER: str = os.getenv("DB_USER", "postgres")
    DB_PASSWORD: str = os.getenv("DB_PASSWORD", "root")
    DB_NAME: str = os.getenv("DB_NAME", "supplycast_db")
    DATABASE_URL_OVERRIDE: Optional[str] = os.getenv("DATABASE_URL")

    # Security Configuration
    SECRET_KEY: str = os.getenv("SECRET_KEY", "your-secret-key-change-in-production")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

    # Application Configuration
    APP_TITLE: str = "SupplyCast Forecasting API"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Forecasting
    FORECAST_DEFAULT_MONTHS: int = int(os.getenv("FORECAST_DEFAULT_MONTHS", "12"))
    HISTORY_WINDOW: int = int(os.getenv("HISTORY_WINDOW", "52"))
    SYNTHETIC_HISTORY_ENABLED: bool = _env_bool("SYNTHETIC_HISTORY_ENABLED")
    DEFAULT_LEAD_TIME_DAYS: int = int(os.getenv("DEFAULT_LEAD_TIME_DAYS", "7"))
    REORDER_SKIP_DUPLICATE_PENDING: bool = _env_bool("REORDER_SKIP_DUPLICATE_PENDING")

    # Scheduler
    SCHEDULER_ENABLED: bool = _env_bool("SCHEDULER_ENABLED", "true")
    SCHEDULER_CHECK_INTERVAL: int = int(os.getenv("SCHEDULER_CHECK_INTERVAL", "60"))
    FORECAST_JOB_HOUR: int = int(os.getenv("FORECAST_JOB_HOUR", "2"))
    REORDER_JOB_HOUR: int = int(os.getenv("REORDER_JOB_HOUR", "4"))

    @property
    def DATABASE_URL(self) -> str:
        """Construct database URL"""
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

# Global settings instance
settings = Settings()
