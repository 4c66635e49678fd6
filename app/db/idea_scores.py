"""CRUD operations for the per-user idea score history."""

import math
from typing import Any
from uuid import UUID

from app.core.logging import get_logger
from app.core.schemas_score import ScoreResult
from app.core.score_inputs import round_half_up
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)

TABLE = "idea_scores"
LIST_COLUMNS = "id, idea, verdict, score_out_of_10, created_at, result"


def list_idea_scores(user_id: str, limit: int = 50) -> list[dict[str, Any]]:
    """
    List a user's scored ideas, newest first.

    Args:
        user_id: Owning user ID
        limit: Maximum number of rows to return

    Returns:
        List of idea score dicts
    """
    supabase = get_supabase()

    response = (
        supabase.table(TABLE)
        .select(LIST_COLUMNS)
        .eq("user_id", str(user_id))
        .order("created_at", desc=True)
        .limit(limit)
        .execute()
    )
    return response.data or []


def get_latest_score(user_id: str) -> int | None:
    """
    Get the score of the user's most recent idea.

    Returns:
        Rounded score, or None if there is no row or the stored value is unusable
    """
    supabase = get_supabase()

    response = (
        supabase.table(TABLE)
        .select("score_out_of_10, created_at")
        .eq("user_id", str(user_id))
        .order("created_at", desc=True)
        .limit(1)
        .execute()
    )

    rows = response.data or []
    if not rows:
        return None

    value = rows[0].get("score_out_of_10")
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        return None
    return round_half_up(value)


def create_idea_score(user_id: str, idea: str, result: ScoreResult) -> dict[str, Any]:
    """
    Append a scored idea to the user's history.

    Args:
        user_id: Owning user ID
        idea: Idea text as submitted
        result: Normalised score result, stored whole in the result column

    Returns:
        Created row dict

    Raises:
        ValueError: If the insert returned no row
    """
    supabase = get_supabase()

    data = {
        "user_id": str(user_id),
        "idea": idea,
        "result": result.model_dump(),
        "score_out_of_10": result.score_out_of_10,
        "verdict": result.verdict,
    }

    response = supabase.table(TABLE).insert(data).execute()
    if not response.data:
        raise ValueError("Failed to save idea score")

    logger.info(f"Saved idea score for user {user_id}")
    return response.data[0]


def delete_idea_score(user_id: str, score_id: UUID) -> bool:
    """
    Delete one of the user's history rows.

    Returns:
        True if a row was deleted
    """
    supabase = get_supabase()

    response = (
        supabase.table(TABLE)
        .delete()
        .eq("id", str(score_id))
        .eq("user_id", str(user_id))
        .execute()
    )
    return bool(response.data)


def clear_idea_scores(user_id: str) -> int:
    """
    Delete all of the user's history rows.

    Returns:
        Number of rows deleted
    """
    supabase = get_supabase()

    response = supabase.table(TABLE).delete().eq("user_id", str(user_id)).execute()
    deleted = len(response.data or [])

    logger.info(f"Cleared {deleted} idea scores for user {user_id}")
    return deleted
