"""
Configuration management using Pydantic Settings
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Database (stands in for the browser key-value store)
    DATABASE_URL: str = "sqlite:///./skillforge.db"
    SEED_DEMO_DATA: bool = True

    # Gemini API
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"

    # Session tokens
    SECRET_KEY: str = "dev-secret-skillforge"
    JWT_ALGORITHM: str = "HS256"
    TOKEN_EXPIRE_MINUTES: int = 0  # 0 = never expires

    # Application
    APP_NAME: str = "SkillForge"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Quiz Settings
    QUESTION_CACHE_TTL: int = 3600  # 1 hour
    MAX_GENERATED_QUESTIONS: int = 10

    # Users
    MIN_PASSWORD_LENGTH: int = 6

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()
