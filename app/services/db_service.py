from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from app.core.config import Settings
from app.core.errors import PersistenceError
from app.core.logger import logger

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "schema.sql"

Record = Dict[str, Any]


class Store(Protocol):
    """Persistence client consumed by the services. One statement per call."""

    async def ping(self) -> bool: ...
    async def list_bookings(self) -> List[Record]: ...
    async def insert_booking(self, data: Mapping[str, Any]) -> Record: ...
    async def delete_booking(self, booking_id: Any) -> bool: ...
    async def mark_booking_paid(self, booking_id: Any) -> bool: ...
    async def insert_testimonial(self, data: Mapping[str, Any]) -> Record: ...
    async def list_testimonials(self) -> List[Record]: ...
    async def delete_testimonial(self, testimonial_id: Any) -> bool: ...


class SqlStore:
    """
    Runs parameterized SQL through a pooled SQLAlchemy engine.
    Blocking driver calls are moved off the event loop with run_in_threadpool.
    """

    def __init__(self, database_url: str = None, engine: Engine = None, pool_size: int = 5):
        if engine is None:
            engine = create_engine(database_url, pool_pre_ping=True, pool_size=pool_size, future=True)
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    # --- Low level helpers ---

    def _fetch_all(self, query: str, params: Optional[Mapping[str, Any]] = None) -> List[Record]:
        with self._engine.connect() as connection:
            rows = connection.execute(text(query), dict(params or {})).mappings().all()
        return [dict(row) for row in rows]

    def _write_returning(self, query: str, params: Mapping[str, Any]) -> Optional[Record]:
        # RETURNING tells us whether a row matched, rowcount is unreliable with it
        with self._engine.begin() as connection:
            row = connection.execute(text(query), dict(params)).mappings().first()
        return dict(row) if row is not None else None

    async def _run(self, operation: str, fn, *args) -> Any:
        try:
            return await run_in_threadpool(fn, *args)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Database operation failed: {operation}.") from e

    # --- Store API ---

    async def ping(self) -> bool:
        try:
            await self._run("ping", self._fetch_all, "SELECT 1")
            return True
        except PersistenceError as e:
            logger.warning(f"⚠️ Database not reachable: {e.__cause__}")
            return False

    def create_schema(self, schema_path: Path = SCHEMA_PATH) -> None:
        """Creates both tables if they do not exist yet."""
        statements = [s.strip() for s in schema_path.read_text(encoding="utf-8").split(";") if s.strip()]
        with self._engine.begin() as connection:
            for statement in statements:
                connection.execute(text(statement))
        logger.info(f"✅ Schema ensured ({len(statements)} statements)")

    async def list_bookings(self) -> List[Record]:
        return await self._run(
            "list bookings", self._fetch_all,
            "SELECT * FROM bookings4 ORDER BY datetime DESC",
        )

    async def insert_booking(self, data: Mapping[str, Any]) -> Record:
        return await self._run(
            "insert booking", self._write_returning,
            "INSERT INTO bookings4 (service, duration, price, name, phone, datetime) "
            "VALUES (:service, :duration, :price, :name, :phone, :datetime) RETURNING *",
            data,
        )

    async def delete_booking(self, booking_id: Any) -> bool:
        row = await self._run(
            "delete booking", self._write_returning,
            "DELETE FROM bookings4 WHERE id = :id RETURNING id",
            {"id": booking_id},
        )
        return row is not None

    async def mark_booking_paid(self, booking_id: Any) -> bool:
        row = await self._run(
            "confirm payment", self._write_returning,
            "UPDATE bookings4 SET payment_status = :status WHERE id = :id RETURNING *",
            {"status": "completed", "id": booking_id},
        )
        return row is not None

    async def insert_testimonial(self, data: Mapping[str, Any]) -> Record:
        return await self._run(
            "insert testimonial", self._write_returning,
            "INSERT INTO testimonials (reviewer_name, reviewer_email, review_title, review_text, "
            "rating, genuine_opinion, created_at) VALUES (:reviewer_name, :reviewer_email, "
            ":review_title, :review_text, :rating, :genuine_opinion, CURRENT_TIMESTAMP) RETURNING *",
            data,
        )

    async def list_testimonials(self) -> List[Record]:
        return await self._run(
            "list testimonials", self._fetch_all,
            "SELECT * FROM testimonials ORDER BY created_at DESC",
        )

    async def delete_testimonial(self, testimonial_id: Any) -> bool:
        row = await self._run(
            "delete testimonial", self._write_returning,
            "DELETE FROM testimonials WHERE id = :id RETURNING id",
            {"id": testimonial_id},
        )
        return row is not None

    def dispose(self) -> None:
        self._engine.dispose()


def create_store(settings: Settings) -> Store:
    if settings.DB_BACKEND == "supabase":
        from app.services.supabase_service import SupabaseStore
        return SupabaseStore(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    if settings.DB_BACKEND != "postgres":
        raise ValueError(f"Unknown DB_BACKEND: {settings.DB_BACKEND!r}")
    return SqlStore(settings.database_url, pool_size=settings.DB_POOL_SIZE)
