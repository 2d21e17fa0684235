from decimal import Decimal
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from src.integrations.policy.payment_service import PaymentService

api = APIRouter()
momo_api = api


class PaymentInitiateRequest(BaseModel):
    phoneNumber: str
    amount: Decimal = Field(..., gt=0)
    provider: str = "mtn"


def get_payment_service(request: Request) -> PaymentService:
    return request.app.state.payment_service


@api.post("/create-user", tags=["MoMo"])
async def create_user(service: PaymentService = Depends(get_payment_service)):
    """One-time provider onboarding: create an API user and its API key."""
    api_user = await service.create_api_user()
    return {"userId": api_user.user_id, "apiKey": api_user.api_key}


@api.post("/pay", tags=["MoMo"])
async def pay(body: PaymentInitiateRequest, service: PaymentService = Depends(get_payment_service)):
    initiation = await service.initiate_payment(body.phoneNumber, body.amount, body.provider)

    response: Dict[str, Any] = {
        "referenceId": initiation.reference_id,
        "status": initiation.status.value.lower(),
        "message": initiation.message,
    }
    if initiation.development_mode:
        response["developmentMode"] = True
    return response


@api.get("/status/{referenceId}", tags=["MoMo"])
async def payment_status(referenceId: str, service: PaymentService = Depends(get_payment_service)):
    result = await service.check_status(referenceId)

    # Pass the provider payload through; the browser only relies on status/amount/currency.
    response: Dict[str, Any] = dict(result.raw)
    response.setdefault("status", result.status.value)
    response.setdefault("referenceId", result.reference_id)
    response.setdefault("amount", result.amount)
    response.setdefault("currency", result.currency)
    if result.development_mode:
        response["developmentMode"] = True
    return response
