"""
Application configuration management
"""

import json
from typing import Annotated, List, Optional
from pydantic_settings import BaseSettings, NoDecode
from pydantic import field_validator


MAX_SEAT_ROWS = 26  # one letter per row, A-Z


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Seatlock"
    APP_VERSION: str = "1.0.0"
    APP_ENV: str = "development"
    DEBUG: bool = False
    API_PREFIX: str = "/api/v1"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Seat grid
    SEAT_ROWS: int = 10
    SEATS_PER_ROW: int = 10

    # Locking
    SEAT_LOCK_TTL_SECONDS: int = 60
    SEAT_SWEEP_INTERVAL_SECONDS: float = 0  # 0 keeps the sweep lazy

    # Admin
    ADMIN_RESET_ENABLED: bool = True

    # CORS
    # comma separated or a JSON list
    CORS_ORIGINS: Annotated[List[str], NoDecode] = ["*"]

    # Monitoring
    PROMETHEUS_ENABLED: bool = True
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    LOG_FILE: Optional[str] = "logs/app.log"

    @field_validator("APP_ENV")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        if v not in ("development", "testing", "production"):
            raise ValueError("APP_ENV must be one of development, testing, production")
        return v

    @field_validator("SEAT_ROWS")
    @classmethod
    def validate_seat_rows(cls, v: int) -> int:
        if not 1 <= v <= MAX_SEAT_ROWS:
            raise ValueError(f"SEAT_ROWS must be between 1 and {MAX_SEAT_ROWS}")
        return v

    @field_validator("SEATS_PER_ROW")
    @classmethod
    def validate_seats_per_row(cls, v: int) -> int:
        if v < 1:
            raise ValueError("SEATS_PER_ROW must be at least 1")
        return v

    @field_validator("SEAT_LOCK_TTL_SECONDS")
    @classmethod
    def validate_lock_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("SEAT_LOCK_TTL_SECONDS must be positive")
        return v

    @field_validator("SEAT_SWEEP_INTERVAL_SECONDS")
    @classmethod
    def validate_sweep_interval(cls, v: float) -> float:
        if v < 0:
            raise ValueError("SEAT_SWEEP_INTERVAL_SECONDS cannot be negative")
        return v

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("LOG_FORMAT must be 'json' or 'text'")
        return v

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            if v.strip().startswith("["):
                return json.loads(v)
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @property
    def is_testing(self) -> bool:
        return self.APP_ENV == "testing"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


# Create global settings instance
settings = Settings()
