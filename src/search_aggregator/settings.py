"""
Application Settings

Centralized configuration using Pydantic Settings for type safety and validation.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings with validation and type safety."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # API keys, validated lazily so a missing key surfaces as ConfigurationError
    google_search_api_key: str = ""
    gemini_api_key: str = ""

    # Google Custom Search settings
    search_engine_id: str = "17fa9a5ae1f2d4281"
    google_search_url: str = "https://www.googleapis.com/customsearch/v1"

    # Gemini settings
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_model: str = "gemini-2.0-flash"

    # None leaves requests unbounded, matching the browser fetch behaviour
    http_timeout: float | None = None

    # Cache settings
    enable_cache: bool = False
    cache_dir: str = "cache"
    cache_ttl_hours: float = 24

    # History settings
    history_file: str = "search_history.json"
    history_limit: int = 20

    def missing_api_keys(self) -> list[str]:
        """Get the environment variable names of unset API keys."""
        missing = []
        if not self.google_search_api_key.strip():
            missing.append("GOOGLE_SEARCH_API_KEY")
        if not self.gemini_api_key.strip():
            missing.append("GEMINI_API_KEY")
        return missing

    def require_api_keys(self) -> None:
        """
        Ensure both API keys are configured.

        Raises:
            ConfigurationError: If either key is missing
        """
        missing = self.missing_api_keys()
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)} "
                "environment variable(s) must be set"
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
