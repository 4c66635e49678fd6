"""Pydantic schemas for authentication."""

from typing import Optional

from pydantic import BaseModel, EmailStr


class User(BaseModel):
    """Authenticated Supabase user."""
    id: str
    email: Optional[str] = None


class MagicLinkRequest(BaseModel):
    """Request to send a passwordless sign-in link."""
    email: EmailStr
    redirect_url: Optional[str] = None  # Where to land after clicking the link


class MagicLinkResponse(BaseModel):
    """Response after sending magic link."""
    message: str = "Magic link sent"
    email: EmailStr


class SessionResponse(BaseModel):
    """Current session info."""
    user: User
