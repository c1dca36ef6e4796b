"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", env_prefix="ORBIT_", extra="ignore")

    # Database
    database_url: str = "sqlite:///./orbit.db"

    # Key-value storage keys
    transactions_key: str = "orbit_transactions"
    preferences_key: str = "orbit_settings"

    # Service
    service_name: str = "orbit-ledger"
    log_level: str = "INFO"

    # Display defaults
    default_language: str = "en"
    default_currency: str = "USD"


settings = Settings()
