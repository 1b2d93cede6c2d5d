"""
Configuration module with environment-based settings.
Supports: development, staging, production
"""
from pydantic import SecretStr
from pydantic_settings import BaseSettings
from typing import List, Optional
from functools import lru_cache
from dotenv import load_dotenv
import os

# Load .env file
load_dotenv()


class ConfigurationError(RuntimeError):
    """Raised at startup when required configuration is missing."""


class BaseConfig(BaseSettings):
    """Base configuration shared across all environments."""

    # Application
    APP_NAME: str = "moniewave"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Paystack
    PAYSTACK_SECRET_KEY: Optional[SecretStr] = None
    PAYSTACK_BASE_URL: str = "https://api.paystack.co"
    PAYSTACK_TIMEOUT: float = 10.0

    # Servers
    HOST: str = "0.0.0.0"
    PORT: int = 4000
    MCP_TRANSPORT: str = "stdio"

    # Security
    CORS_ORIGINS: List[str] = ["*"]

    # Rate Limiting
    RATE_LIMIT_REQUESTS: int = 60
    RATE_LIMIT_PERIOD: str = "minute"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore"
    }

    @property
    def rate_limit(self) -> str:
        """slowapi limit string, e.g. '60/minute'."""
        return f"{self.RATE_LIMIT_REQUESTS}/{self.RATE_LIMIT_PERIOD}"

    def paystack_secret(self) -> str:
        """
        Return the Paystack secret key or fail loudly.

        Both servers call this before accepting traffic, so a missing key
        stops the process at startup instead of surfacing per request.
        """
        if self.PAYSTACK_SECRET_KEY is None:
            raise ConfigurationError("PAYSTACK_SECRET_KEY environment variable is required")
        secret = self.PAYSTACK_SECRET_KEY.get_secret_value().strip()
        if not secret:
            raise ConfigurationError("PAYSTACK_SECRET_KEY environment variable is required")
        return secret


class DevelopmentConfig(BaseConfig):
    """Development environment configuration."""
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"

    # Relaxed rate limits for testing
    RATE_LIMIT_REQUESTS: int = 1000


class ProductionConfig(BaseConfig):
    """Production environment configuration."""
    ENVIRONMENT: str = "production"
    DEBUG: bool = False
    LOG_LEVEL: str = "WARNING"

    # Strict rate limits
    RATE_LIMIT_REQUESTS: int = 60


class StagingConfig(BaseConfig):
    """Staging environment configuration."""
    ENVIRONMENT: str = "staging"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    RATE_LIMIT_REQUESTS: int = 100


@lru_cache()
def get_settings() -> BaseConfig:
    """
    Factory function that returns the appropriate config based on ENVIRONMENT.
    Uses lru_cache for singleton pattern.
    """
    env = os.getenv("ENVIRONMENT", "development").lower()

    config_map = {
        "development": DevelopmentConfig,
        "dev": DevelopmentConfig,
        "staging": StagingConfig,
        "stage": StagingConfig,
        "production": ProductionConfig,
        "prod": ProductionConfig,
    }

    config_class = config_map.get(env, DevelopmentConfig)
    return config_class()
