import asyncio
from typing import Any, Dict, List, Mapping
from supabase import create_async_client, AsyncClient

from app.core.errors import PersistenceError
from app.core.logger import logger

BOOKINGS_TABLE = "bookings4"
TESTIMONIALS_TABLE = "testimonials"


class SupabaseStore:
    """
    Same operations as SqlStore, expressed as Supabase (PostgREST) table queries
    against the same two tables. Defaults (payment_status, timestamps) come from the schema.
    """

    def __init__(self, url: str, key: str, client: AsyncClient = None):
        self._url = url
        self._key = key
        self._client = client
        self._client_lock = asyncio.Lock()

    async def get_client(self) -> AsyncClient:
        if self._client:
            return self._client
        # One client per store, concurrent first requests wait for it
        async with self._client_lock:
            if not self._client:
                if not (self._url and self._key):
                    logger.warning("⚠️ Supabase credentials missing")
                    raise PersistenceError("Database is not configured.")
                try:
                    self._client = await create_async_client(self._url, self._key)
                    logger.info("✅ Supabase Async client initialized")
                except Exception as e:
                    raise PersistenceError("Database connection failed.") from e
        return self._client

    async def _execute(self, operation: str, build) -> List[Dict[str, Any]]:
        client = await self.get_client()
        try:
            response = await build(client).execute()
        except Exception as e:
            raise PersistenceError(f"Database operation failed: {operation}.") from e
        return response.data or []

    async def ping(self) -> bool:
        try:
            await self._execute("ping", lambda c: c.table(BOOKINGS_TABLE).select("id").limit(1))
            return True
        except PersistenceError as e:
            logger.warning(f"⚠️ Supabase not reachable: {e.__cause__ or e}")
            return False

    async def list_bookings(self) -> List[Dict[str, Any]]:
        return await self._execute(
            "list bookings",
            lambda c: c.table(BOOKINGS_TABLE).select("*").order("datetime", desc=True),
        )

    async def insert_booking(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        rows = await self._execute(
            "insert booking", lambda c: c.table(BOOKINGS_TABLE).insert(dict(data))
        )
        if not rows:
            raise PersistenceError("Database operation failed: insert booking.")
        return rows[0]

    async def delete_booking(self, booking_id: Any) -> bool:
        rows = await self._execute(
            "delete booking", lambda c: c.table(BOOKINGS_TABLE).delete().eq("id", booking_id)
        )
        return bool(rows)

    async def mark_booking_paid(self, booking_id: Any) -> bool:
        rows = await self._execute(
            "confirm payment",
            lambda c: c.table(BOOKINGS_TABLE).update({"payment_status": "completed"}).eq("id", booking_id),
        )
        return bool(rows)

    async def insert_testimonial(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        rows = await self._execute(
            "insert testimonial", lambda c: c.table(TESTIMONIALS_TABLE).insert(dict(data))
        )
        if not rows:
            raise PersistenceError("Database operation failed: insert testimonial.")
        return rows[0]

    async def list_testimonials(self) -> List[Dict[str, Any]]:
        return await self._execute(
            "list testimonials",
            lambda c: c.table(TESTIMONIALS_TABLE).select("*").order("created_at", desc=True),
        )

    async def delete_testimonial(self, testimonial_id: Any) -> bool:
        rows = await self._execute(
            "delete testimonial", lambda c: c.table(TESTIMONIALS_TABLE).delete().eq("id", testimonial_id)
        )
        return bool(rows)
