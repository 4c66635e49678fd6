"""API endpoint for the current user's profile and trial state."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.core.auth_middleware import AuthContext, require_auth
from app.core.logging import get_logger
from app.core.schemas_history import ProfileResponse
from app.core.trial import trial_days_left
from app.db import profiles as profiles_db

logger = get_logger(__name__)

router = APIRouter()


@router.get("/profile", response_model=ProfileResponse)
def get_profile(auth: AuthContext = Depends(require_auth)):
    """
    Get trial state, creating the profile row on first visit.

    trial_end stays null until billing sets it.
    """
    try:
        profiles_db.ensure_profile(auth.user_id)
        trial_end = profiles_db.get_trial_end(auth.user_id)
    except Exception as e:
        logger.error(f"Failed to load profile for user {auth.user_id}: {e}")
        return JSONResponse(status_code=500, content={"error": str(e) or "Failed to load profile"})

    return ProfileResponse(
        user_id=auth.user_id,
        trial_end=trial_end,
        trial_days_left=trial_days_left(trial_end),
    )
