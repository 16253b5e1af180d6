from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Checked when the first search is made, so the app can boot without them
    AMADEUS_CLIENT_ID: str = ""
    AMADEUS_CLIENT_SECRET: str = ""
    AMADEUS_HOSTNAME: str = "test"  # or "production"

    ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    DEFAULT_CURRENCY: str = "USD"

    # Search sizing
    MAX_PROVIDER_RESULTS: int = 250  # offers requested from Amadeus
    RESULT_LIMIT: int = 20  # flights returned to the client

    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://localhost:3001",
    ]

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

settings = Settings()
