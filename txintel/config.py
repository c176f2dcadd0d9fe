"""Configuration management for the feed aggregation service."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Source fetching
    fetch_timeout: float = 15.0
    max_entries_per_feed: int = 100
    api_page_size: int = 50
    user_agent: str = "Mozilla/5.0 (compatible; TexasEnvironmentalIntel/1.0)"

    # Federal Register API
    federal_register_term: str = "Texas environmental"
    actionable_only: bool = True

    # Aggregation
    summary_max_chars: int = 400
    max_items: int = 100

    # Cache-Control policy (seconds)
    cache_max_age: int = 1800
    cache_stale_while_revalidate: int = 3600
    empty_cache_max_age: int = 300

    # Contact form delivery (optional - submissions are only logged without a key)
    resend_api_key: Optional[str] = None
    contact_recipient: str = "contact@example.com"
    contact_sender: str = "Texas Environmental Intel <noreply@example.com>"
    contact_max_attachment_bytes: int = 5 * 1024 * 1024

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Application Settings
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def has_email_delivery(self) -> bool:
        """Check if outbound contact email is configured."""
        return bool(self.resend_api_key)


def get_settings() -> Settings:
    """Get application settings from the environment and .env file."""
    return Settings()
