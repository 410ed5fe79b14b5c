"""Application configuration using pydantic-settings."""

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server
    port: int = 8080
    host: str = "0.0.0.0"

    # Logging
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./smartcook.db"

    # Identity provider: receives the bearer token, answers with the user id
    auth_verify_url: Optional[str] = None
    http_timeout: int = 30  # seconds

    # Language model
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    gemini_temperature: float = 0.7
    gemini_max_tokens: int = 2000

    # Image hosting (Cloudflare Images)
    cloudflare_account_id: Optional[str] = None
    cloudflare_account_hash: Optional[str] = None
    cloudflare_image_api_token: Optional[str] = None
    cloudflare_images_key: Optional[str] = None
    signed_url_ttl_seconds: int = 3600

    # Rate Limiting
    recommend_rate_limit: str = "20/hour"

    # CORS
    cors_origins: str = "*"  # Comma-separated origins or "*" for all

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Get list of CORS origins."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]


# Global settings instance
settings = Settings()
