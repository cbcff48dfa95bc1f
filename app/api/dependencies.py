from functools import lru_cache

from fastapi import Depends

from app.core.config import settings
from app.services.booking_service import BookingService
from app.services.db_service import Store, create_store
from app.services.payment_service import PaymentService
from app.services.testimonial_service import TestimonialService


@lru_cache(maxsize=1)
def get_store() -> Store:
    return create_store(settings)


def get_booking_service(store: Store = Depends(get_store)) -> BookingService:
    return BookingService(store)


def get_payment_service(store: Store = Depends(get_store)) -> PaymentService:
    return PaymentService(
        store,
        qr_base_url=settings.PAYMENT_QR_BASE_URL,
        delay=settings.PAYMENT_SIMULATION_DELAY,
    )


def get_testimonial_service(store: Store = Depends(get_store)) -> TestimonialService:
    return TestimonialService(store)
