"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Data sources
    debts_api_url: str = "http://localhost:8001/debts"
    payment_plans_api_url: str = "http://localhost:8001/payment_plans"
    payments_api_url: str = "http://localhost:8001/payments"

    # Service
    service_name: str = "debt-reconciler"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 30.0
    snapshot_timeout_seconds: float = 240.0  # Overall wait for all three collections

    # Reconciliation policy
    grace_period_days: int = 0  # 0 = exact schedule date match only
    next_due_fallback: str = "start_date"  # start_date | start_date_plus_increment
    strict_integrity: bool = False  # Raise on orphaned plans/payments instead of reporting


settings = Settings()
