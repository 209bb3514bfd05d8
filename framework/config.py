from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Basic configuration ---
    APP_NAME: str = "Order Tracker"
    APP_DESCRIPTION: str = "Multi-tenant order and task tracker with notes, image attachments and per-owner settings"
    APP_VERSION: str = "1.0.0"
    APP_ENV: str = "development"  # development, production, testing
    DEBUG: bool = True
    SECRET_KEY: str = "your-super-secret-key-change-it-in-production"

    # --- Database (SQLModel, any async SQLAlchemy URL) ---
    # Default store lives only as long as the process
    DATABASE_URL: str = "sqlite+aiosqlite:///:memory:"
    DB_ECHO: bool = False

    # --- Bootstrap ---
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin123"
    SEED_SAMPLE_ORDERS: bool = False

    # --- Guest access ---
    GUEST_USERNAME: str = "Guest"
    GUEST_ID_PREFIX: str = "guest_"

    # --- Attachments ---
    MAX_ATTACHMENT_BYTES: int = 2 * 1024 * 1024
    MAX_ATTACHMENTS_PER_TASK: int = 10

    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # --- Cookie ---
    ACCESS_TOKEN_COOKIE_NAME: str = "session_token"
    COOKIE_SECURE: bool = False  # Set True in production (HTTPS only)
    COOKIE_SAMESITE: str = "strict"  # lax, strict, none

    # --- Logging ---
    LOG_DIR: str = "logs"

    # --- API route prefixes ---
    API_AUTH_PREFIX: str = "/api/auth"
    API_PREFIX: str = "/api"

    # --- Pydantic ---
    # Load env from project root .env; priority: env vars > .env > defaults
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
    )


# Singleton settings instance
settings = Settings()
