from typing import List
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/crm.db"
    DATABASE_ECHO: bool = False

    REDIS_URL: str = ""
    IDEMPOTENCY_TTL: int = 300  # 5 minutes

    WEBHOOK_URL: str = ""
    WEBHOOK_TIMEOUT: int = 10
    WEBHOOK_RETRIES: int = 3

    CORS_ORIGINS: List[str] = ["*"]

    QUOTE_NUMBER_PREFIX: str = "DPT-"
    ORDER_NUMBER_PREFIX: str = "ORD-"
    LOW_STOCK_THRESHOLD: int = 10

    API_TITLE: str = "Dogument Pet Travel CRM"
    API_DESCRIPTION: str = "REST API for customers, inventory, orders, employees, schedules and quotes"
    API_VERSION: str = "1.0.0"

    HOST: str = "0.0.0.0"
    PORT: int = 8000

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
