"""API router for ValidateAI endpoints."""

from fastapi import APIRouter

from app.api import auth, checkout, history, profile, score

router = APIRouter()

# Scoring core
router.include_router(score.router, tags=["score"])

# Passwordless auth (Supabase)
router.include_router(auth.router)

# Per-user history and trial state (Supabase tables)
router.include_router(history.router, tags=["history"])
router.include_router(profile.router, tags=["profile"])

# Subscription checkout (Stripe)
router.include_router(checkout.router, tags=["billing"])
