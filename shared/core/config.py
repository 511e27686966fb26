import os
from typing import List
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    JWT_SECRET: str = os.getenv("JWT_SECRET", "change-me")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_MINUTES: int = int(os.getenv("JWT_EXPIRE_MINUTES", 1440))

    DB_USER: str | None = os.getenv("DB_USER")
    DB_PASS: str | None = os.getenv("DB_PASS")
    DB_HOST: str | None = os.getenv("DB_HOST")
    DB_PORT: str | None = os.getenv("DB_PORT")
    STOCK_DB_NAME: str | None = os.getenv("STOCK_DB_NAME")
    # Full URL wins over the DB_* parts, e.g. sqlite:///./stock.db
    STOCK_DATABASE_URL: str | None = os.getenv("STOCK_DATABASE_URL")

    DEFAULT_LIST_LIMIT: int = int(os.getenv("DEFAULT_LIST_LIMIT", 100))
    MAX_LIST_LIMIT: int = int(os.getenv("MAX_LIST_LIMIT", 1000))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: List[str] = [
        "http://localhost:8080",
        "http://127.0.0.1:8003",
    ]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()


def build_stock_database_url(cfg: Settings) -> str:
    if cfg.STOCK_DATABASE_URL:
        return cfg.STOCK_DATABASE_URL
    if not cfg.DB_HOST:
        return "sqlite:///" + os.path.join(BASE_DIR, "stock.db")
    return (
        f"postgresql+psycopg2://{cfg.DB_USER}:{cfg.DB_PASS}@{cfg.DB_HOST}:{cfg.DB_PORT}/{cfg.STOCK_DB_NAME}"
    )


STOCK_DATABASE_URL = build_stock_database_url(settings)
