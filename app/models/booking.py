from typing import Any, Dict, List, Literal, Optional, Union
import datetime as dt
from pydantic import BaseModel, ConfigDict

PaymentStatus = Literal["pending", "completed"]

BOOKING_FIELDS = ("service", "duration", "price", "name", "phone", "datetime")
TEXT_FIELDS = ("service", "name", "phone", "datetime")

Scalar = Union[str, int, float]

# --- Incoming Request Models ---

class BookingCreate(BaseModel):
    # Fields stay optional at parse time so a missing one maps to 400, not 422
    service: Optional[Scalar] = None
    duration: Optional[Scalar] = None
    price: Optional[Union[float, str]] = None
    name: Optional[Scalar] = None
    phone: Optional[Scalar] = None
    datetime: Optional[Scalar] = None

    def missing_fields(self) -> List[str]:
        """Names of fields that are absent or falsy (empty string, 0, null)."""
        return [field for field in BOOKING_FIELDS if not getattr(self, field)]

    def to_record(self) -> Dict[str, Any]:
        """Column values for the insert, text columns as strings (a phone may arrive as a number)."""
        record = self.model_dump()
        for field in TEXT_FIELDS:
            record[field] = str(record[field])
        return record

# --- Persisted Record ---

class Booking(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    service: str
    duration: Any
    # NUMERIC comes back as Decimal, send it as a JSON number
    price: Union[float, str]
    name: str
    phone: str
    datetime: Any
    payment_status: PaymentStatus = "pending"
    booking_time: Optional[dt.datetime] = None
