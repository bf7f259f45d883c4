from pathlib import Path
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LOG_CONFIG_PATH = Path(__file__).with_name("logging_config.json")


class Settings(BaseSettings):
    # Application
    ENVIRONMENT: str = "development"
    NAME: str = "University Course Admin"
    VERSION: str = "1.0.0"
    LOG_LEVEL: str = ""
    LOG_CONFIG_PATH: Path = DEFAULT_LOG_CONFIG_PATH

    # Backend API
    API_BASE_URL: str = "http://localhost:8080/api"
    REQUEST_TIMEOUT: float = 30.0
    DASHBOARD_STATS_PATH: str = ""

    # Authentication & persisted client state
    LOGIN_PATH: str = "/login"
    AUTH_STORAGE_PATH: Path = Path(".course_admin/auth.json")

    # Students
    STUDENT_NUMBER_PREFIX: str = "S"
    STUDENT_NUMBER_DIGITS: int = 6
    DEFAULT_STUDENT_ROLE: str = "student"

    # Dashboard
    RECENT_ACTIVITY_LIMIT: int = 5

    @field_validator("API_BASE_URL", mode="before")
    def strip_trailing_slash(cls, v: str) -> str:
        """httpx joins relative paths onto the base URL, so keep it slash-free."""
        return v.rstrip("/") if isinstance(v, str) else v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
