"""
Configuration for the Supabase client facade.
"""

from dataclasses import dataclass
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ClientConfigurationError

DEFAULT_SCHEMA = "public"


@dataclass(frozen=True)
class SupabaseClientConfig:
    """Immutable configuration owned by a ``SupabaseClient``."""

    # Project settings
    url: str
    key: str
    schema: str = DEFAULT_SCHEMA

    # Auth settings
    auto_refresh_token: bool = True
    listen_for_auth_changes: bool = False

    # Monitoring settings
    enable_logging: bool = True


class SupabaseSettings(BaseSettings):
    """Pydantic settings for Supabase configuration from environment."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        case_sensitive=False,
        extra="ignore",
    )

    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    supabase_anon_key: Optional[str] = None  # fallback for SUPABASE_KEY
    supabase_schema: str = DEFAULT_SCHEMA

    # Auth settings
    supabase_auto_refresh_token: bool = True
    supabase_listen_for_auth_changes: bool = False

    supabase_enable_logging: bool = True

    def to_client_config(self) -> SupabaseClientConfig:
        """Convert to SupabaseClientConfig."""
        key = self.supabase_key or self.supabase_anon_key
        if not self.supabase_url:
            raise ClientConfigurationError(
                "SUPABASE_URL must be set in environment variables",
                client_name="SupabaseSettings",
            )
        if not key:
            raise ClientConfigurationError(
                "SUPABASE_KEY (or SUPABASE_ANON_KEY) must be set in environment variables",
                client_name="SupabaseSettings",
            )

        return SupabaseClientConfig(
            url=self.supabase_url,
            key=key,
            schema=self.supabase_schema,
            auto_refresh_token=self.supabase_auto_refresh_token,
            listen_for_auth_changes=self.supabase_listen_for_auth_changes,
            enable_logging=self.supabase_enable_logging,
        )
