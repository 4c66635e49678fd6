"""Database operations for user profiles (subscription trial state)."""

from typing import Optional

from app.db.supabase_client import get_supabase as get_client


def ensure_profile(user_id: str) -> None:
    """Create the user's profile row if missing. Existing rows are left untouched."""
    client = get_client()
    (
        client.table("profiles")
        .upsert({"user_id": str(user_id)}, on_conflict="user_id", ignore_duplicates=True)
        .execute()
    )


def get_trial_end(user_id: str) -> Optional[str]:
    """Get the trial expiry timestamp for a user, if one has been set."""
    client = get_client()
    result = (
        client.table("profiles")
        .select("trial_end")
        .eq("user_id", str(user_id))
        .limit(1)
        .execute()
    )
    if result.data:
        return result.data[0].get("trial_end")
    return None
