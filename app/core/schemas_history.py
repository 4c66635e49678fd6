"""Pydantic schemas for score history, profile and billing endpoints."""

from typing import Any

from pydantic import BaseModel, Field

from app.core.schemas_score import ScoreResult


class HistoryCreate(BaseModel):
    """Request body for saving a scored idea."""

    idea: str = Field(..., min_length=1, description="Idea text as submitted")
    result: ScoreResult = Field(..., description="Result returned by /score")


class HistoryItem(BaseModel):
    """One row of a user's score history."""

    id: str
    idea: str
    verdict: str | None = None
    verdict_label: str | None = Field(default=None, description="Leading verdict label, if any")
    score_out_of_10: int | None = None
    created_at: str | None = None
    result: dict[str, Any] | None = None


class HistoryListResponse(BaseModel):
    """Response for listing history."""

    items: list[HistoryItem]
    total: int


class LatestScoreResponse(BaseModel):
    """Most recent score, used as previous_score for the next iteration."""

    previous_score: int | None = None


class ClearHistoryResponse(BaseModel):
    """Response after clearing history."""

    deleted: int


class ProfileResponse(BaseModel):
    """Subscription trial state for the current user."""

    user_id: str
    trial_end: str | None = None
    trial_days_left: int | None = None


class CheckoutRequest(BaseModel):
    """Request body for starting a subscription checkout."""

    plan: Any = Field(default=None, description="\"yearly\"; any other value means monthly")


class CheckoutResponse(BaseModel):
    """Hosted checkout URL."""

    url: str
