# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./retail_store.db"

    # Extra origin allowed by CORS (admin panel / storefront deployment)
    FRONTEND_URL: Optional[str] = None

    LOG_LEVEL: str = "INFO"

    # Cost factor for staff password hashes
    BCRYPT_ROUNDS: int = 12

    class Config:
        env_file: ClassVar[str] = str(env_path)

settings = Settings()
