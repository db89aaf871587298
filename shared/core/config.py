import os
from typing import List, Optional
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    JWT_SECRET: str = os.getenv("JWT_SECRET", "change-me")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_MINUTES: int = int(os.getenv("JWT_EXPIRE_MINUTES", 1440))  # 24 hours default

    # Full URL wins over the individual DB_* parts
    DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL")
    DB_USER: Optional[str] = os.getenv("DB_USER")
    DB_PASS: Optional[str] = os.getenv("DB_PASS")
    DB_HOST: Optional[str] = os.getenv("DB_HOST")
    DB_PORT: Optional[str] = os.getenv("DB_PORT", "5432")
    DB_NAME: Optional[str] = os.getenv("DB_NAME")

    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:8080"]
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # How many times the verification snapshot is re-read when a write lands mid-read
    SNAPSHOT_READ_ATTEMPTS: int = int(os.getenv("SNAPSHOT_READ_ATTEMPTS", 3))

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()


def build_database_url(s: Settings) -> str:
    if s.DATABASE_URL:
        return s.DATABASE_URL
    if s.DB_HOST:
        return (
            f"postgresql+psycopg2://{s.DB_USER}:{s.DB_PASS}@{s.DB_HOST}:{s.DB_PORT}/{s.DB_NAME}"
        )
    return "sqlite:///./partner_console.db"


DATABASE_URL = build_database_url(settings)
