# airport_billing/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = False

    # Security
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Database
    DATABASE_URL: str

    # Email (Resend). No key means delivery is skipped and logged.
    RESEND_API_KEY: str | None = None
    RESEND_FROM_EMAIL: str = "Airport Inventory System <noreply@airport-inventory.com>"

    # Frontend
    FRONTEND_URL: str = "http://localhost:5173"

    # Invoices
    INVOICE_DIR: str = "invoices"
    INVOICE_URL_PREFIX: str = "/invoices"
    CURRENCY_LABEL: str = "INR"
    SUPPORT_EMAIL: str = "support@airport-inventory.com"

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    CHECKOUT_RATE_LIMIT: str = "30/minute"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="forbid",
    )


settings = Settings()
