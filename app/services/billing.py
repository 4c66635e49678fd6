"""Stripe subscription checkout.

Two fixed plans: monthly (with a free trial) and yearly (no trial). The
session and the resulting subscription are both tagged with the user ID and
plan so that webhook consumers can attribute them.
"""

from typing import Literal

import stripe

from app.core.config import Settings
from app.core.logging import get_logger

logger = get_logger(__name__)

Plan = Literal["monthly", "yearly"]


class CheckoutConfigError(Exception):
    """Raised when billing settings needed for checkout are missing."""


def resolve_plan(plan: object) -> Plan:
    """Yearly only when asked for explicitly; everything else is monthly."""
    return "yearly" if plan == "yearly" else "monthly"


def _price_id_for(plan: Plan, settings: Settings) -> str:
    if plan == "yearly":
        price_id, env_name = settings.STRIPE_PRICE_ID_YEARLY, "STRIPE_PRICE_ID_YEARLY"
    else:
        price_id, env_name = settings.STRIPE_PRICE_ID_MONTHLY, "STRIPE_PRICE_ID_MONTHLY"

    if not price_id:
        raise CheckoutConfigError(f"Missing {env_name}")
    return price_id


def create_checkout_session(user_id: str, plan: Plan, settings: Settings) -> str:
    """
    Create a Stripe Checkout session for a subscription.

    Args:
        user_id: Supabase user ID, stored in session and subscription metadata
        plan: "monthly" or "yearly"
        settings: Application settings

    Returns:
        Hosted checkout URL

    Raises:
        CheckoutConfigError: If a price ID, the app URL or the secret key is missing
        stripe.StripeError: If Stripe rejects the request
    """
    price_id = _price_id_for(plan, settings)

    if not settings.APP_URL:
        raise CheckoutConfigError("Missing APP_URL")
    if not settings.STRIPE_SECRET_KEY:
        raise CheckoutConfigError("Missing STRIPE_SECRET_KEY")

    app_url = settings.APP_URL.rstrip("/")
    metadata = {"user_id": str(user_id), "app": settings.APP_NAME, "plan": plan}

    subscription_data: dict = {"metadata": metadata}
    if plan == "monthly":
        subscription_data["trial_period_days"] = settings.MONTHLY_TRIAL_DAYS

    request_options: dict = {"api_key": settings.STRIPE_SECRET_KEY}
    if settings.STRIPE_API_VERSION:
        request_options["stripe_version"] = settings.STRIPE_API_VERSION

    session = stripe.checkout.Session.create(
        mode="subscription",
        line_items=[{"price": price_id, "quantity": 1}],
        success_url=f"{app_url}/success?session_id={{CHECKOUT_SESSION_ID}}",
        cancel_url=f"{app_url}/pricing",
        metadata=metadata,
        subscription_data=subscription_data,
        **request_options,
    )

    logger.info(f"Created {plan} checkout session for user {user_id}")
    return session.url
