"""Payment service — Stripe payment intents.

Learn: The backend never sees card data. It creates a PaymentIntent for
the amount (in the smallest currency unit) and hands the client secret
to the frontend, which confirms the payment directly with Stripe.

The Stripe SDK is synchronous, so calls run in Starlette's threadpool
to keep the event loop (and every open WebSocket) responsive.
"""

from typing import Optional

import stripe
import structlog
from starlette.concurrency import run_in_threadpool

from fastfood.config import settings

logger = structlog.get_logger()


class PaymentError(Exception):
    """Raised when Stripe is unconfigured or rejects the request."""
    pass


class PaymentService:
    def __init__(self, api_key: Optional[str] = None):
        self.api_key = api_key if api_key is not None else settings.stripe_secret_key

    async def create_payment_intent(self, amount: int, currency: str) -> str:
        """Create a PaymentIntent and return its client secret."""
        if not self.api_key:
            raise PaymentError("Payments are not configured")
        try:
            intent = await run_in_threadpool(
                stripe.PaymentIntent.create,
                api_key=self.api_key,
                amount=amount,
                currency=currency,
                automatic_payment_methods={"enabled": True},
            )
        except stripe.StripeError as e:
            logger.warning(
                "payment.intent_failed",
                amount=amount,
                currency=currency,
                error=str(e),
            )
            raise PaymentError(e.user_message or str(e)) from e

        logger.info("payment.intent_created", intent_id=intent.id, amount=amount)
        return intent.client_secret


def get_payment_service() -> PaymentService:
    return PaymentService()
