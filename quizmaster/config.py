"""
Configuration management using Pydantic Settings
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""
    
    # Remote store (hosted PostgreSQL in production)
    DATABASE_URL: str = "sqlite:///./quizmaster.db"
    
    # Local fallback store
    LOCAL_STORE_BACKEND: str = "file"  # file, redis or memory
    LOCAL_STORE_PATH: str = ".quizmaster/local_store.json"
    REDIS_URL: str = "redis://localhost:6379/0"
    LOCAL_QUIZZES_KEY: str = "localQuizzes"
    QUIZ_HISTORY_KEY: str = "quizHistory"
    
    # Application
    APP_NAME: str = "Quiz Master"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]
    
    # Quiz creation retry
    CREATE_QUIZ_MAX_ATTEMPTS: int = 2
    CREATE_QUIZ_RETRY_DELAY: float = 1.0  # seconds
    
    # Logging
    LOG_LEVEL: str = "INFO"
    
    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()
