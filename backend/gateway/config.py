"""
Application configuration using Pydantic Settings.
All environment variables are loaded here with sensible defaults.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server
    port: int = 3000
    environment: str = "development"  # "production" switches display URLs to production_base_url
    log_level: str = "INFO"
    cors_origins: str = "*"  # Comma separated list

    # Public base URL used for display links when running in production
    production_base_url: str = "https://rentelme-server.onrender.com"

    # Google OAuth client (from Google Cloud console)
    google_client_id: Optional[str] = None
    google_client_secret: Optional[str] = None
    google_redirect_uri: Optional[str] = None

    # Obtained once through /auth, then copied here by the operator
    google_refresh_token: Optional[str] = None

    # Uploads
    max_upload_bytes: int = 5 * 1024 * 1024  # 5MB

    # Image proxy
    image_cache_max_age: int = 31536000  # 1 year
    stream_chunk_size: int = 256 * 1024  # Bytes per ranged Drive download request

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def public_base_url(self) -> str:
        """Base URL for links handed back to clients."""
        if self.is_production:
            return self.production_base_url.rstrip("/")
        return f"http://localhost:{self.port}"

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


# Global settings instance
settings = Settings()
