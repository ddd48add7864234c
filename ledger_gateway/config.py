"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # External Services
    erp_api_base: str = "http://localhost:5000"

    # Service
    service_name: str = "ledger-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Views
    strict_validation: bool = False  # Raise on data-quality problems instead of coercing to zero
    recent_transactions_limit: int = 5


settings = Settings()
