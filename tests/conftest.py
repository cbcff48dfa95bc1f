import itertools
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import get_payment_service, get_store
from app.core.config import settings
from app.core.errors import PersistenceError
from app.main import app
from app.services.payment_service import PaymentService


class FakeStore:
    """In-memory stand-in for the database with the same ordering and defaults."""

    def __init__(self):
        self.bookings = {}
        self.testimonials = {}
        self.fail = False
        self._ids = itertools.count(1)

    def _check(self):
        if self.fail:
            try:
                raise RuntimeError('relation "bookings4" does not exist')
            except RuntimeError as e:
                raise PersistenceError("Database operation failed.") from e

    async def ping(self):
        return not self.fail

    async def list_bookings(self):
        self._check()
        return sorted(self.bookings.values(), key=lambda b: (b["datetime"], b["id"]), reverse=True)

    async def insert_booking(self, data):
        self._check()
        booking = dict(data, id=next(self._ids), payment_status="pending",
                       booking_time=datetime.now(timezone.utc))
        self.bookings[booking["id"]] = booking
        return dict(booking)

    async def delete_booking(self, booking_id):
        self._check()
        return self.bookings.pop(int(booking_id), None) is not None

    async def mark_booking_paid(self, booking_id):
        self._check()
        booking = self.bookings.get(int(booking_id))
        if booking is None:
            return False
        booking["payment_status"] = "completed"
        return True

    async def insert_testimonial(self, data):
        self._check()
        testimonial = dict(data, id=next(self._ids), created_at=datetime.now(timezone.utc))
        self.testimonials[testimonial["id"]] = testimonial
        return dict(testimonial)

    async def list_testimonials(self):
        self._check()
        return sorted(self.testimonials.values(), key=lambda t: (t["created_at"], t["id"]), reverse=True)

    async def delete_testimonial(self, testimonial_id):
        self._check()
        return self.testimonials.pop(int(testimonial_id), None) is not None


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_payment_service] = lambda: PaymentService(
        store, qr_base_url=settings.PAYMENT_QR_BASE_URL, delay=0
    )
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
