"""Application configuration via environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    DATABASE_URL: str = "sqlite:///./gift_registry.db"
    CORS_ORIGINS: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    # Signed credentials
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TICKET_EXPIRE_MINUTES: int = 30
    GUEST_SESSION_EXPIRE_MINUTES: int = 60 * 24 * 7
    IDENTITY_TOKEN_EXPIRE_MINUTES: int = 60 * 8

    # "open" admits any non-empty code, "match" requires EventConfig.access_code
    ACCESS_CODE_POLICY: str = "open"
    EVENT_TIMEZONE: str = "America/Sao_Paulo"

    # Receipt uploads
    RECEIPTS_DIR: str = "./receipts"
    MAX_RECEIPT_SIZE_MB: float = 10
    ALLOWED_RECEIPT_TYPES: list[str] = ["image/jpeg", "image/png", "image/webp", "application/pdf"]

    # Bootstrap admin (create_first_admin.py)
    FIRST_ADMIN_USER_ID: str = "admin"
    FIRST_ADMIN_EMAIL: str = "admin@example.com"
    FIRST_ADMIN_PASSWORD: str = "admin"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
