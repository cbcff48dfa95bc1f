from typing import List

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_testimonial_service
from app.models.payment import MessageResponse
from app.models.testimonial import Testimonial, TestimonialCreate
from app.services.testimonial_service import TestimonialService

router = APIRouter(prefix="/testimonials")

@router.post("", response_model=Testimonial, status_code=status.HTTP_201_CREATED)
async def create_testimonial(req: TestimonialCreate, service: TestimonialService = Depends(get_testimonial_service)):
    return await service.create_testimonial(req)

@router.get("", response_model=List[Testimonial])
async def list_testimonials(service: TestimonialService = Depends(get_testimonial_service)):
    return await service.list_testimonials()

@router.delete("/{testimonial_id}", response_model=MessageResponse)
async def delete_testimonial(testimonial_id: int, service: TestimonialService = Depends(get_testimonial_service)):
    message = await service.delete_testimonial(testimonial_id)
    return {"message": message}
