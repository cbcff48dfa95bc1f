from typing import Optional, Union
from pydantic import BaseModel

class PaymentInitiateRequest(BaseModel):
    amount: Optional[Union[str, float]] = None
    serviceName: Optional[str] = None
    bookingId: Optional[Union[int, str]] = None

class PaymentConfirmRequest(BaseModel):
    bookingId: Optional[Union[int, str]] = None
    # Sent by the simulated gateway, not checked
    transactionId: Optional[str] = None
    status: Optional[str] = None

class PaymentInitiation(BaseModel):
    message: str
    qrCodeUrl: str
    transactionId: str
    status: str = "pending"

class MessageResponse(BaseModel):
    message: str
