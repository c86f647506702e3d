from pydantic_settings import BaseSettings
from typing import List, Optional

class AdminAPISettings(BaseSettings):
    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Database connection
    MONGODB_URI: str
    DATABASE_NAME: str = "admin_api"
    ADMIN_COLLECTION: str = "admins"
    MONGODB_TLS: bool = False
    MONGODB_CONNECT_RETRIES: int = 3
    MONGODB_RETRY_DELAY: int = 2

    # Security - JWT
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    JWT_ACCESS_TOKEN_COOKIE_NAME: str = "access_token"

    # Cookie settings
    COOKIE_SECURE: bool = False
    COOKIE_DOMAIN: Optional[str] = None
    COOKIE_SAMESITE: str = "lax"

    # Password hashing
    BCRYPT_ROUNDS: int = 12
    MIN_PASSWORD_LENGTH: int = 8

    # Admin collection behaviour
    DEFAULT_PAGE_SIZE: int = 10
    SEARCH_LIMIT: int = 10
    SEARCHABLE_FIELDS: str = "email,name,surname,role"

    # Default Admin Configuration (bootstrap is skipped unless both are set)
    DEFAULT_ADMIN_EMAIL: Optional[str] = None
    DEFAULT_ADMIN_PASSWORD: Optional[str] = None

    # CORS Configuration
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: str = "GET,POST,PUT,DELETE,OPTIONS"
    CORS_ALLOW_HEADERS: str = "Content-Type,Authorization"
    CORS_MAX_AGE: int = 600

    # Server Configuration
    SERVICE_NAME: str = "admin-api"
    SERVICE_VERSION: str = "1.0.0"
    SERVICE_HOST: str = "0.0.0.0"
    SERVICE_PORT: int = 8000

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"  # Allow extra fields from .env that this service doesn't use

    @property
    def searchable_fields(self) -> List[str]:
        # password is never searchable, whatever the environment says
        fields = [f.strip() for f in self.SEARCHABLE_FIELDS.split(",") if f.strip()]
        return [f for f in fields if f != "password"]

def get_settings() -> AdminAPISettings:
    return AdminAPISettings()
