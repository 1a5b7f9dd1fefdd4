from fastapi import Request
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    PROJECT_NAME: str = "Meal Prep Recipe Browser"
    ROOT_PATH: str = ""
    ENVIRONMENT: str = "development"

    # Database
    DATABASE_URL: str = "sqlite:///./db/mealprep.db"

    # Search and favorites listings
    PAGE_SIZE: int = 10

    # CSV snapshots consumed by migration_scripts
    DATA_DIR: str = "data"

    LOGGING_CONFIG: str = "logging.ini"

    # Per client IP, applied to every route
    RATE_LIMIT: str = "120/minute"

    # CORS
    # In production, you would handle this more robustly, possibly parsing a comma-separated string
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000"
    ]

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env")

    @property
    def is_testing(self) -> bool:
        return self.ENVIRONMENT == "testing" or "test" in self.DATABASE_URL.lower()

settings = Settings()


def get_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings
