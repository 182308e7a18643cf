"""Payments API — Stripe PaymentIntent creation."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from fastfood.services.payment_service import (
    PaymentError,
    PaymentService,
    get_payment_service,
)

router = APIRouter(prefix="/stripe")


class PaymentIntentRequest(BaseModel):
    amount: int = Field(..., gt=0, description="Amount in the smallest currency unit")
    currency: str = Field(..., min_length=3, max_length=3)


class PaymentIntentResponse(BaseModel):
    client_secret: str


@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
async def create_payment_intent(
    body: PaymentIntentRequest,
    payments: PaymentService = Depends(get_payment_service),
):
    try:
        secret = await payments.create_payment_intent(body.amount, body.currency.lower())
    except PaymentError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return PaymentIntentResponse(client_secret=secret)
