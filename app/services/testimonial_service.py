from typing import Any, Dict, List

from app.core.errors import NotFoundError, PersistenceError, ValidationError
from app.core.logger import logger
from app.models.testimonial import TestimonialCreate
from app.services.db_service import Store


class TestimonialService:
    def __init__(self, store: Store):
        self.store = store

    async def create_testimonial(self, req: TestimonialCreate) -> Dict[str, Any]:
        if req.missing_fields():
            raise ValidationError("All testimonial fields (except title) are required.")

        rating = req.valid_rating()
        if rating is None:
            raise ValidationError("Rating must be between 1 and 5.")

        data = {
            "reviewer_name": req.reviewerName,
            "reviewer_email": req.reviewerEmail,
            "review_title": req.reviewTitle,
            "review_text": req.reviewText,
            "rating": rating,
            "genuine_opinion": req.genuineOpinion,
        }
        try:
            testimonial = await self.store.insert_testimonial(data)
        except PersistenceError as e:
            raise PersistenceError("Failed to add testimonial to the database.") from e

        logger.info(f"⭐ Testimonial {testimonial.get('id')} added ({rating}/5) by {req.reviewerName}")
        return testimonial

    async def list_testimonials(self) -> List[Dict[str, Any]]:
        try:
            return await self.store.list_testimonials()
        except PersistenceError as e:
            raise PersistenceError("Failed to retrieve testimonials from the database.") from e

    async def delete_testimonial(self, testimonial_id: int) -> str:
        try:
            deleted = await self.store.delete_testimonial(testimonial_id)
        except PersistenceError as e:
            # Never echo the driver message back to the client
            raise PersistenceError("Failed to delete testimonial from the database.") from e

        if not deleted:
            raise NotFoundError(f"Testimonial with ID {testimonial_id} not found.")

        logger.info(f"🗑️ Testimonial {testimonial_id} deleted from DB.")
        return f"Testimonial with ID {testimonial_id} deleted successfully."
