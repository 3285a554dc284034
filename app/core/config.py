"""
Configuration settings for the API.
Loads environment variables and provides application settings.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """
    
    # Database
    DATABASE_URL: str
    SQL_ECHO: bool = False
    
    # Security
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    BCRYPT_ROUNDS: int = 12
    
    # Admin account created on startup
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin123"
    ADMIN_EMAIL: str = "admin@bankcards.example.com"
    
    # Transfers
    TRANSFER_MAX_RETRIES: int = 3
    TRANSFER_RETRY_BACKOFF_SECONDS: float = 0.05
    
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    
    # API
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Bank Cards API"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "REST API for bank card issuance, card lifecycle and transfers between own cards"
    
    class Config:
        env_file = ".env"
        case_sensitive = True


# Create global settings instance
settings = Settings()
