from typing import List

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_booking_service
from app.models.booking import Booking, BookingCreate
from app.models.payment import MessageResponse
from app.services.booking_service import BookingService

router = APIRouter()

@router.get("/bookings4", response_model=List[Booking])
async def list_bookings(service: BookingService = Depends(get_booking_service)):
    return await service.list_bookings()

@router.post("/bookings4", response_model=Booking, status_code=status.HTTP_201_CREATED)
async def create_booking(req: BookingCreate, service: BookingService = Depends(get_booking_service)):
    return await service.create_booking(req)

@router.delete("/bookings4/{booking_id}", response_model=MessageResponse)
async def delete_booking(booking_id: int, service: BookingService = Depends(get_booking_service)):
    message = await service.delete_booking(booking_id)
    return {"message": message}
