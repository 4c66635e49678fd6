"""API endpoint for starting a subscription checkout."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.core.auth_middleware import AuthContext, require_auth
from app.core.config import get_settings
from app.core.logging import get_logger
from app.core.schemas_history import CheckoutRequest, CheckoutResponse
from app.services.billing import create_checkout_session, resolve_plan

logger = get_logger(__name__)

router = APIRouter()


@router.post("/checkout", response_model=CheckoutResponse)
def start_checkout(
    body: CheckoutRequest | None = None,
    auth: AuthContext = Depends(require_auth),
):
    """
    Create a Stripe Checkout session for the caller.

    Monthly includes a free trial; yearly does not. Any plan other than
    "yearly" is treated as monthly.
    """
    plan = resolve_plan(body.plan if body else None)

    try:
        url = create_checkout_session(auth.user_id, plan, get_settings())
    except Exception as e:
        logger.error(f"Checkout failed for user {auth.user_id}: {e}")
        return JSONResponse(status_code=500, content={"error": str(e) or "Checkout failed"})

    return CheckoutResponse(url=url)
