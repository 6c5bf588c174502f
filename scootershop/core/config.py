# scootershop/core/config.py

from pathlib import Path
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the project root directory (where .env should be located)
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra="ignore"
    )

    # App Configuration
    APP_NAME: str = "Scooter Shop API"
    DEBUG: bool = False
    VERSION: str = "0.1.0"

    # Database Configuration
    DATABASE_URL: str

    # Admin session
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ADMIN_PASSWORD: str
    SESSION_COOKIE_NAME: str = "admin-session"
    SESSION_EXPIRE_MINUTES: int = 60 * 24 * 7

    # CORS Configuration
    FRONTEND_URL: str = "http://localhost:3000"

    # Targets: 0 = Sunday ... 6 = Saturday
    FIRST_DAY_OF_WEEK: int = 0

    # Optional: Environment
    ENVIRONMENT: str = "development"

    @field_validator("FIRST_DAY_OF_WEEK")
    @classmethod
    def _check_first_day_of_week(cls, value: int) -> int:
        if not 0 <= value <= 6:
            raise ValueError("FIRST_DAY_OF_WEEK must be between 0 (Sunday) and 6 (Saturday)")
        return value

    @property
    def is_sqlite(self) -> bool:
        """SQLite (tests, local runs) needs different engine arguments."""
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

# Create a global settings instance
settings = Settings()
