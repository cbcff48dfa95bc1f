from fastapi import APIRouter, Depends

from app.api.dependencies import get_payment_service
from app.models.payment import (
    MessageResponse,
    PaymentConfirmRequest,
    PaymentInitiateRequest,
    PaymentInitiation,
)
from app.services.payment_service import PaymentService

router = APIRouter(prefix="/payments")

@router.post("/initiate", response_model=PaymentInitiation)
async def initiate_payment(req: PaymentInitiateRequest, service: PaymentService = Depends(get_payment_service)):
    """
    Simulates starting a gateway payment: returns a QR code URL and a transaction id.
    Nothing is stored; /confirm identifies the booking by its id.
    """
    return await service.initiate_payment(req)

@router.post("/confirm", response_model=MessageResponse)
async def confirm_payment(req: PaymentConfirmRequest, service: PaymentService = Depends(get_payment_service)):
    """Webhook-style confirmation, marks the booking as paid."""
    message = await service.confirm_payment(req)
    return {"message": message}
