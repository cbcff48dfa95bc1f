import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from app.core.errors import PersistenceError
from app.services.supabase_service import SupabaseStore

def mock_client(data=None, error=None):
    """
    MagicMock returns the same child for every call on a path, so a single
    `execute` at the end of any chain can be set through a shared query mock.
    """
    client = MagicMock()
    query = MagicMock()
    for method in ("select", "insert", "update", "delete", "eq", "order", "limit"):
        getattr(query, method).return_value = query
    if error:
        query.execute = AsyncMock(side_effect=error)
    else:
        query.execute = AsyncMock(return_value=MagicMock(data=data))
    client.table.return_value = query
    return client, query

@pytest.mark.asyncio
async def test_list_bookings_orders_by_datetime():
    client, query = mock_client(data=[{"id": 2}, {"id": 1}])
    store = SupabaseStore("https://x.supabase.co", "key", client=client)

    rows = await store.list_bookings()

    assert rows == [{"id": 2}, {"id": 1}]
    client.table.assert_called_with("bookings4")
    query.order.assert_called_with("datetime", desc=True)

@pytest.mark.asyncio
async def test_insert_booking_returns_first_row():
    client, query = mock_client(data=[{"id": 5, "payment_status": "pending"}])
    store = SupabaseStore("https://x.supabase.co", "key", client=client)

    row = await store.insert_booking({"service": "Massage"})

    assert row == {"id": 5, "payment_status": "pending"}
    query.insert.assert_called_with({"service": "Massage"})

@pytest.mark.asyncio
async def test_mark_booking_paid():
    client, query = mock_client(data=[{"id": 5}])
    store = SupabaseStore("https://x.supabase.co", "key", client=client)

    assert await store.mark_booking_paid(5) is True
    query.update.assert_called_with({"payment_status": "completed"})
    query.eq.assert_called_with("id", 5)

@pytest.mark.asyncio
async def test_delete_missing_rows_reports_false():
    client, _ = mock_client(data=[])
    store = SupabaseStore("https://x.supabase.co", "key", client=client)

    assert await store.delete_booking(1) is False
    assert await store.delete_testimonial(1) is False

@pytest.mark.asyncio
async def test_client_errors_are_wrapped():
    client, _ = mock_client(error=RuntimeError("JWT expired"))
    store = SupabaseStore("https://x.supabase.co", "key", client=client)

    with pytest.raises(PersistenceError) as exc_info:
        await store.list_testimonials()
    assert "JWT" not in exc_info.value.message
    assert await store.ping() is False

@pytest.mark.asyncio
async def test_missing_credentials():
    store = SupabaseStore("", "")
    with pytest.raises(PersistenceError):
        await store.list_bookings()

@pytest.mark.asyncio
async def test_concurrent_first_requests_share_one_client():
    client, _ = mock_client(data=[])

    async def slow_create(url, key):
        await asyncio.sleep(0.01)
        return client

    store = SupabaseStore("https://x.supabase.co", "key")
    with patch("app.services.supabase_service.create_async_client", side_effect=slow_create) as mock_create:
        first, second = await asyncio.gather(store.get_client(), store.get_client())

    assert first is second is client
    mock_create.assert_called_once_with("https://x.supabase.co", "key")
