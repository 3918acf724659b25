# control-plane/config.py
"""
Application Configuration
Uses pydantic-settings for environment variable management
"""

from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables
    Create a .env file for local development
    """

    # === Application ===
    APP_NAME: str = "External Endpoint Control Plane"
    APP_VERSION: str = "1.0.0"
    ENV: str = "development"  # development, staging, production
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # === API ===
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_PREFIX: str = "/api/v1"

    # CORS
    CORS_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True

    # === Object Store ===
    DATABASE_URL: str = "sqlite:///./endpoints.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    # === Security ===
    ADMIN_SECRET: str = "change-me-admin-secret"

    # === Routing Objects ===
    INGRESS_KIND: str = "Ingress"
    INGRESS_API_VERSION: str = "networking.k8s.io/v1"
    ROUTE_KIND: str = "HTTPRoute"
    ROUTE_API_VERSION: str = "gateway.networking.k8s.io/v1"
    GATEWAY_KIND: str = "Gateway"

    # Suffix appended to the descriptor name to form the routing object name
    INGRESS_NAME_SUFFIX: str = "-ingress"
    ROUTE_NAME_SUFFIX: str = "-route"

    DEFAULT_PATH: str = "/"
    PATH_MATCH_TYPE: str = "PathPrefix"

    # === Ownership ===
    OWNER_KIND: str = "ExposureDescriptor"
    OWNER_API_VERSION: str = "endpoints.example.com/v1"

    # === Reconcile ===
    RECONCILE_TIMEOUT_SECONDS: float = 30.0  # Deadline for store calls of one reconcile

    # === Admin URL ===
    ADMIN_URL_PROTOCOL: str = "http"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production"""
        return self.ENV.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development"""
        return self.ENV.lower() == "development"


@lru_cache()
def get_settings() -> Settings:
    """
    Cached settings instance
    Use this to get settings throughout the application
    """
    return Settings()


settings = get_settings()
