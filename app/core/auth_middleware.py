"""Authentication dependencies for FastAPI."""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.schemas_auth import User
from app.db.supabase_client import get_supabase

logger = logging.getLogger(__name__)

# HTTP Bearer scheme for Authorization header
security = HTTPBearer(auto_error=False)


class AuthContext:
    """Context object containing authenticated user info."""

    def __init__(self, user: User, token: str):
        self.user = user
        self.token = token
        self.user_id = user.id


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[AuthContext]:
    """
    Resolve the Supabase session behind a Bearer token.

    Returns None if no valid auth is present (for optional auth endpoints).
    """
    if not credentials:
        return None

    token = credentials.credentials

    try:
        # Validates the JWT signature and expiry against Supabase Auth
        auth_response = get_supabase().auth.get_user(token)
    except Exception as e:
        logger.warning(f"Auth error: {e}")
        return None

    if not auth_response or not auth_response.user:
        return None

    supabase_user = auth_response.user
    return AuthContext(
        user=User(id=str(supabase_user.id), email=supabase_user.email),
        token=token,
    )


async def require_auth(
    auth: Optional[AuthContext] = Depends(get_current_user),
) -> AuthContext:
    """Require authentication. Raises 401 if not authenticated."""
    if not auth:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return auth
