from typing import Any, Dict, List

from app.core.errors import NotFoundError, PersistenceError, ValidationError
from app.core.logger import logger
from app.models.booking import BookingCreate
from app.services.db_service import Store


class BookingService:
    def __init__(self, store: Store):
        self.store = store

    async def list_bookings(self) -> List[Dict[str, Any]]:
        """All bookings, most recent appointment first."""
        try:
            return await self.store.list_bookings()
        except PersistenceError as e:
            raise PersistenceError("Failed to retrieve bookings from the database.") from e

    async def create_booking(self, req: BookingCreate) -> Dict[str, Any]:
        """
        Persists a new booking. payment_status ('pending') and booking_time
        are filled in by the database.
        """
        missing = req.missing_fields()
        if missing:
            logger.info(f"⚠️ Booking rejected, missing fields: {', '.join(missing)}")
            raise ValidationError("All booking fields are required.")

        try:
            booking = await self.store.insert_booking(req.to_record())
        except PersistenceError as e:
            raise PersistenceError("Failed to add booking to the database.") from e

        logger.info(f"✅ Booking {booking.get('id')} created: {req.service} for {req.name} at {req.datetime}")
        return booking

    async def delete_booking(self, booking_id: int) -> str:
        try:
            deleted = await self.store.delete_booking(booking_id)
        except PersistenceError as e:
            raise PersistenceError("Failed to delete booking from the database.") from e

        if not deleted:
            raise NotFoundError(f"Booking with ID {booking_id} not found.")

        logger.info(f"🗑️ Booking {booking_id} deleted from DB.")
        return f"Booking with ID {booking_id} deleted successfully."
