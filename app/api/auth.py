"""Authentication API endpoints (passwordless email link)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.auth_middleware import AuthContext, require_auth
from app.core.config import get_settings
from app.core.schemas_auth import MagicLinkRequest, MagicLinkResponse, SessionResponse
from app.db.supabase_client import get_supabase as get_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/magic-link", response_model=MagicLinkResponse)
def send_magic_link(request: MagicLinkRequest):
    """
    Send a sign-in link to the user's email.

    First-time emails are signed up on the fly; there is no invite step.
    """
    settings = get_settings()

    redirect_url = request.redirect_url
    if not redirect_url and settings.APP_URL:
        redirect_url = f"{settings.APP_URL.rstrip('/')}/auth/callback"

    options: dict = {"should_create_user": True}
    if redirect_url:
        options["email_redirect_to"] = redirect_url

    try:
        get_client().auth.sign_in_with_otp({"email": request.email, "options": options})
    except Exception as e:
        logger.error(f"Error sending magic link: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to send magic link. Please try again.",
        )

    return MagicLinkResponse(message="Magic link sent to your email", email=request.email)


@router.get("/me", response_model=SessionResponse)
def get_current_session(auth: AuthContext = Depends(require_auth)):
    """Get the current user's session information."""
    return SessionResponse(user=auth.user)


@router.post("/logout")
def logout(auth: AuthContext = Depends(require_auth)):
    """Log out the current user by revoking their session."""
    try:
        get_client().auth.admin.sign_out(auth.token)
    except Exception as e:
        logger.error(f"Logout error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to log out",
        )
    return {"message": "Logged out successfully"}
