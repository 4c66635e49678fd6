"""Supabase client initialization."""

from functools import lru_cache

from supabase import Client, create_client

from app.core.config import get_settings


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """
    Get the shared Supabase client (cached singleton).

    The service role key bypasses row-level security, so every query made
    through this client must filter on the owning user_id.

    Returns:
        Supabase client used for auth lookups and table access

    Raises:
        RuntimeError: If client initialization fails
    """
    settings = get_settings()
    try:
        return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
    except Exception as e:
        raise RuntimeError(f"Failed to initialize Supabase client: {e}") from e
