"""
FlowDash Configuration

All environment variables and settings for the workspace analytics dashboard.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ==========================================================================
    # APP
    # ==========================================================================
    app_name: str = "FlowDash"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # ==========================================================================
    # PARTNER API (workspace, bots, channels)
    # ==========================================================================
    partner_api_base_url: str = "https://chat.talkbi.com.br/api"
    partner_api_token: str

    # ==========================================================================
    # WORKSPACE API (flow summaries, agent summaries, team members)
    # ==========================================================================
    workspace_api_base_url: str = "https://chat.talkbi.com.br/api"
    team_members_page_size: int = 100

    # ==========================================================================
    # HTTP CLIENT
    # ==========================================================================
    http_timeout_seconds: float = 15.0

    # ==========================================================================
    # ANALYTICS
    # ==========================================================================
    default_range: str = "last_30_days"

    # ==========================================================================
    # CORS
    # ==========================================================================
    # Dashboard is embedded via signed URL in the host panel
    cors_origins: str = "*"

    # ==========================================================================
    # SERVER
    # ==========================================================================
    host: str = "0.0.0.0"
    port: int = 8000

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
