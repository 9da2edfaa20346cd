from decimal import Decimal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service configuration, read from environment variables or a .env file"""
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite:///./ledger_service/db/ledger_service.db"

    secret_key: str = "your_secret_key"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # Two amounts closer than this are considered equal
    money_tolerance: Decimal = Decimal("0.01")

    # Max ids per user lookup query
    user_lookup_batch_size: int = 50
    unknown_user_name: str = "Unknown"

    log_level: str = "INFO"


settings = Settings()
