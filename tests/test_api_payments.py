import re
from urllib.parse import parse_qs, urlparse

from app.core.config import settings

BOOKING = {
    "service": "Massage",
    "duration": "60m",
    "price": 50,
    "name": "Ana",
    "phone": "555-1234",
    "datetime": "2025-01-01T10:00:00Z",
}

def test_initiate_payment(client):
    payload = {"amount": "$50", "serviceName": "Massage", "bookingId": 7}
    response = client.post("/api/payments/initiate", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "pending"
    assert "simulated" in data["message"]
    assert re.fullmatch(r"TXN-\d{13}-[0-9a-z]{9}", data["transactionId"])

    url = urlparse(data["qrCodeUrl"])
    assert data["qrCodeUrl"].startswith(settings.PAYMENT_QR_BASE_URL)
    assert parse_qs(url.query) == {"amount": ["50"], "bookingId": ["7"]}

def test_initiate_payment_transaction_ids_differ(client):
    payload = {"amount": "50", "serviceName": "Massage", "bookingId": 1}
    first = client.post("/api/payments/initiate", json=payload).json()["transactionId"]
    second = client.post("/api/payments/initiate", json=payload).json()["transactionId"]
    assert first != second

def test_initiate_payment_requires_all_fields(client):
    for missing in ("amount", "serviceName", "bookingId"):
        payload = {"amount": "50", "serviceName": "Massage", "bookingId": 1}
        del payload[missing]
        response = client.post("/api/payments/initiate", json=payload)
        assert response.status_code == 400
        assert "required" in response.json()["error"]

def test_initiate_payment_does_not_touch_store(client, store):
    booking_id = client.post("/bookings4", json=BOOKING).json()["id"]
    client.post("/api/payments/initiate", json={"amount": "50", "serviceName": "Massage", "bookingId": booking_id})
    assert store.bookings[booking_id]["payment_status"] == "pending"

def test_confirm_payment_flow(client):
    created = client.post("/bookings4", json=BOOKING)
    assert created.status_code == 201
    booking_id = created.json()["id"]
    assert created.json()["payment_status"] == "pending"

    response = client.post("/api/payments/confirm", json={"bookingId": booking_id})
    assert response.status_code == 200
    assert response.json()["message"] == f"Payment for booking ID {booking_id} confirmed successfully."

    booking = next(b for b in client.get("/bookings4").json() if b["id"] == booking_id)
    assert booking["payment_status"] == "completed"

def test_confirm_payment_twice_is_idempotent(client):
    booking_id = client.post("/bookings4", json=BOOKING).json()["id"]

    assert client.post("/api/payments/confirm", json={"bookingId": booking_id}).status_code == 200
    assert client.post("/api/payments/confirm", json={"bookingId": booking_id}).status_code == 200

    booking = client.get("/bookings4").json()[0]
    assert booking["payment_status"] == "completed"

def test_confirm_payment_unknown_booking(client):
    response = client.post("/api/payments/confirm", json={"bookingId": 404})
    assert response.status_code == 404
    assert response.json()["error"] == "Booking with ID 404 not found for payment confirmation."

def test_confirm_payment_requires_booking_id(client):
    response = client.post("/api/payments/confirm", json={"transactionId": "TXN-1-abc"})
    assert response.status_code == 400
    assert response.json()["error"] == "Booking ID is required to confirm payment."

def test_confirm_payment_store_failure(client, store):
    store.fail = True
    response = client.post("/api/payments/confirm", json={"bookingId": 1})
    assert response.status_code == 500
    assert response.json()["error"] == "Failed to update payment status in the database."
