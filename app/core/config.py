"""Configuration management for the ValidateAI service."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # Environment variables should be set directly
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Supabase configuration (required)
    SUPABASE_URL: str = Field(..., description="Supabase project URL")
    SUPABASE_SERVICE_ROLE_KEY: str = Field(..., description="Supabase service role key")

    # OpenAI configuration (required)
    OPENAI_API_KEY: str = Field(..., description="OpenAI API key")
    OPENAI_TIMEOUT_SECONDS: float | None = Field(
        default=None, description="Transport timeout for model calls (None = client default)"
    )

    # Environment
    APP_ENV: str = Field(default="dev", description="Environment: dev, staging, prod")
    APP_NAME: str = Field(default="ValidateAI", description="Product name, tagged on checkout metadata")
    APP_URL: str | None = Field(
        default=None, description="Public URL of the web app, used for redirects"
    )

    # Idea scoring configuration
    SCORE_MODEL: str = Field(default="gpt-4.1-mini", description="Model for idea scoring")
    SCORE_TEMPERATURE: float | None = Field(
        default=None, description="Sampling temperature (None = provider default)"
    )
    SCORE_PROMPT_VERSION: str = Field(default="score_v1", description="Score prompt version")
    SCORE_SCHEMA_VERSION: str = Field(default="idea_score_v1", description="Score schema version")

    # History
    HISTORY_LIMIT: int = Field(default=50, description="Max history rows returned per request")

    # Stripe billing
    STRIPE_SECRET_KEY: str | None = Field(default=None, description="Stripe secret key")
    STRIPE_PRICE_ID_MONTHLY: str | None = Field(default=None, description="Monthly plan price ID")
    STRIPE_PRICE_ID_YEARLY: str | None = Field(default=None, description="Yearly plan price ID")
    STRIPE_API_VERSION: str | None = Field(
        default=None, description="Pinned Stripe API version (None = account default)"
    )
    MONTHLY_TRIAL_DAYS: int = Field(default=30, description="Free trial length for the monthly plan")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance

    Raises:
        ValidationError: If required environment variables are missing
    """
    return Settings()
