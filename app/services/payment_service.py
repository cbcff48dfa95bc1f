import asyncio
import random
import string
import time
from typing import Any
from urllib.parse import urlencode

from app.core.errors import NotFoundError, PersistenceError, ValidationError
from app.core.logger import logger
from app.models.payment import PaymentConfirmRequest, PaymentInitiateRequest, PaymentInitiation
from app.services.db_service import Store

BASE36_ALPHABET = string.digits + string.ascii_lowercase


def generate_transaction_id() -> str:
    """TXN-<epoch millis>-<9 random base36 chars>"""
    suffix = "".join(random.choices(BASE36_ALPHABET, k=9))
    return f"TXN-{int(time.time() * 1000)}-{suffix}"


def build_qr_code_url(base_url: str, amount: Any, booking_id: Any) -> str:
    # Amounts arrive as "$50" from the frontend
    clean_amount = str(amount).replace("$", "").strip()
    return f"{base_url}?{urlencode({'amount': clean_amount, 'bookingId': booking_id})}"


class PaymentService:
    """
    Simulated payment flow. Initiation persists nothing; confirmation plays the
    role of the gateway webhook and flips the booking to 'completed'.
    """

    def __init__(self, store: Store, qr_base_url: str, delay: float = 1.0):
        self.store = store
        self.qr_base_url = qr_base_url
        self.delay = delay

    async def initiate_payment(self, req: PaymentInitiateRequest) -> PaymentInitiation:
        if not req.amount or not req.serviceName or not req.bookingId:
            raise ValidationError(
                "Payment amount, service name, and booking ID are required to initiate payment."
            )

        logger.info(
            f"💳 Simulating payment initiation for Booking ID: {req.bookingId}, "
            f"Service: {req.serviceName}, Amount: {req.amount}"
        )

        # Stand-in for the gateway round trip
        if self.delay > 0:
            await asyncio.sleep(self.delay)

        return PaymentInitiation(
            message="Payment initiation successful (simulated). Scan QR to complete.",
            qrCodeUrl=build_qr_code_url(self.qr_base_url, req.amount, req.bookingId),
            transactionId=generate_transaction_id(),
            status="pending",
        )

    async def confirm_payment(self, req: PaymentConfirmRequest) -> str:
        if not req.bookingId:
            raise ValidationError("Booking ID is required to confirm payment.")

        try:
            updated = await self.store.mark_booking_paid(req.bookingId)
        except PersistenceError as e:
            raise PersistenceError("Failed to update payment status in the database.") from e

        if not updated:
            logger.warning(f"⚠️ Attempted to confirm payment for non-existent booking ID: {req.bookingId}")
            raise NotFoundError(f"Booking with ID {req.bookingId} not found for payment confirmation.")

        logger.info(f"✅ Payment confirmed for Booking ID: {req.bookingId}. Status updated to 'completed'.")
        return f"Payment for booking ID {req.bookingId} confirmed successfully."
