from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App settings
    PROJECT_NAME: str = "SpendingInsights"
    API_PREFIX: str = "/api"
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")

    # CORS
    CORS_ORIGINS: List[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
            "http://localhost:8000",
        ]
    )

    # Analytics presentation limits
    ANOMALY_FEED_LIMIT: int = Field(default=5)
    CASH_FLOW_MONTHS: int = Field(default=6)

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


settings = Settings()
