from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./resumes.db"

    # Where rendered PDFs live; also mounted at /generated
    GENERATED_DIR: str = "public/generated"
    PDF_ENGINE: str = "chromium"

    SMTP_HOST: str = "localhost"
    SMTP_PORT: int = 465
    SMTP_SECURE: bool = True
    SMTP_TIMEOUT: float = 30.0
    INFO_EMAIL: str = "noreply@example.com"
    INFO_MAIL_AUTH: str = ""
    MAIL_SENDER_NAME: str = "LexAI Resume Builder"

    CORS_ORIGINS: List[str] = ["*"]
    PORT: int = 5000
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
