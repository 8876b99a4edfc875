"""Merchant Service Configuration"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment (CART_ prefix)"""

    # Application
    app_name: str = "Merchant Cart Service"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8001
    cors_origins: list[str] = ["*"]

    # Store
    store_code: str = "DEFAULT"
    default_region: str = "*"
    currency: str = "USD"

    # JSON array of custom shipping regions; built-in regions when unset
    shipping_regions_path: Optional[str] = None

    # 0 keeps catalog entries until invalidated
    catalog_cache_ttl_seconds: float = 30.0

    model_config = SettingsConfigDict(
        env_prefix="CART_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
