"""
Configuration settings for Alligator Service
"""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "Alligator"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # MongoDB
    MONGODB_URL: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "alligator"
    MONGODB_USERS_COLLECTION: str = "users"
    MONGODB_POSTS_COLLECTION: str = "posts"
    MONGODB_TIMEOUT_MS: int = 5000

    # JWT Settings
    JWT_SECRET_KEY: str = "secretkey"
    JWT_ALGORITHM: str = "HS256"
    # Tokens never expire unless this is set
    ACCESS_TOKEN_EXPIRE_MINUTES: Optional[int] = None

    # Password Settings
    BCRYPT_ROUNDS: int = 10

    # Static assets
    PUBLIC_DIR: str = "public"
    MEDIA_DIR: str = "images"

    # CORS
    CORS_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: List[str] = ["*"]
    CORS_ALLOW_HEADERS: List[str] = ["*"]

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def media_url_prefix(self) -> str:
        return f"/{self.MEDIA_DIR.strip('/')}"
