from typing import List, Union
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql+asyncpg://postgres:root@db/postgres"
    AUTO_CREATE_TABLES: bool = False
    CORS_ORIGINS: Union[str, List[str]] = ["http://localhost", "http://localhost:3000", "*"]
    LOG_LEVEL: str = "INFO"
    VERSION: str = "1.0.0"

    JWT_SECRET_KEY: str = "your-secret-key-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    # 30 days
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 30
    BCRYPT_ROUNDS: int = 10

    # Report defaults
    UPCOMING_DEFAULT_LIMIT: int = 5
    REPORT_DEFAULT_DAY_COUNT: int = 31

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }


settings = Settings()
