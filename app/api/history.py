"""API endpoints for a user's idea score history."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import JSONResponse

from app.core.auth_middleware import AuthContext, require_auth
from app.core.config import get_settings
from app.core.logging import get_logger
from app.core.schemas_history import (
    ClearHistoryResponse,
    HistoryCreate,
    HistoryItem,
    HistoryListResponse,
    LatestScoreResponse,
)
from app.core.score_normalizer import verdict_label
from app.db import idea_scores as idea_scores_db

logger = get_logger(__name__)

router = APIRouter(prefix="/history")


def _to_item(row: dict[str, Any]) -> HistoryItem:
    return HistoryItem(
        id=str(row["id"]),
        idea=row.get("idea") or "",
        verdict=row.get("verdict"),
        verdict_label=verdict_label(row.get("verdict")),
        score_out_of_10=row.get("score_out_of_10"),
        created_at=row.get("created_at"),
        result=row.get("result"),
    )


def _store_error(action: str, e: Exception) -> JSONResponse:
    logger.error(f"Failed to {action}: {e}")
    return JSONResponse(status_code=500, content={"error": str(e) or f"Failed to {action}"})


@router.get("", response_model=HistoryListResponse)
def list_history(
    limit: int | None = Query(None, ge=1, description="Max rows (capped by HISTORY_LIMIT)"),
    auth: AuthContext = Depends(require_auth),
):
    """List the caller's scored ideas, newest first."""
    max_rows = get_settings().HISTORY_LIMIT
    limit = min(limit or max_rows, max_rows)

    try:
        rows = idea_scores_db.list_idea_scores(auth.user_id, limit=limit)
    except Exception as e:
        return _store_error("list history", e)

    items = [_to_item(row) for row in rows]
    return HistoryListResponse(items=items, total=len(items))


@router.get("/latest", response_model=LatestScoreResponse)
def get_latest(auth: AuthContext = Depends(require_auth)) -> LatestScoreResponse:
    """
    Get the caller's most recent score, for use as previous_score.

    Best effort: a store failure yields null rather than an error.
    """
    try:
        previous = idea_scores_db.get_latest_score(auth.user_id)
    except Exception as e:
        logger.warning(f"Previous score lookup failed for user {auth.user_id}: {e}")
        previous = None

    return LatestScoreResponse(previous_score=previous)


@router.post("", response_model=HistoryItem, status_code=201)
def save_history(body: HistoryCreate, auth: AuthContext = Depends(require_auth)):
    """Append a scored idea to the caller's history."""
    try:
        row = idea_scores_db.create_idea_score(auth.user_id, body.idea.strip(), body.result)
    except Exception as e:
        return _store_error("save idea score", e)

    return _to_item(row)


@router.delete("/{score_id}")
def delete_history_item(
    score_id: UUID = Path(..., description="History row UUID"),
    auth: AuthContext = Depends(require_auth),
):
    """Delete one of the caller's history rows."""
    try:
        deleted = idea_scores_db.delete_idea_score(auth.user_id, score_id)
    except Exception as e:
        return _store_error("delete idea score", e)

    if not deleted:
        return JSONResponse(status_code=404, content={"error": "Idea score not found"})
    return {"deleted": 1}


@router.delete("", response_model=ClearHistoryResponse)
def clear_history(auth: AuthContext = Depends(require_auth)):
    """Delete all of the caller's history rows."""
    try:
        deleted = idea_scores_db.clear_idea_scores(auth.user_id)
    except Exception as e:
        return _store_error("clear history", e)

    return ClearHistoryResponse(deleted=deleted)
