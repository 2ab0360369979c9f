from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # MongoDB Configuration
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB_NAME: str = "woodistore_db"

    # Admin back-office
    ADMIN_API_TOKEN: str = ""

    # Cart & Checkout
    ENFORCE_STOCK_LIMIT: bool = False  # False: stock is advisory (stock_warning only)
    ORDER_SUBMISSION_TIMEOUT_SECONDS: float = 10.0
    SESSION_HEADER: str = "X-Session-Id"

    # Application Settings
    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:9002"]
    API_V1_PREFIX: str = "/api"
    PROJECT_NAME: str = "Woodistore"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
