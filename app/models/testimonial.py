from typing import Any, List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict

class TestimonialCreate(BaseModel):

    reviewerName: Optional[str] = None
    reviewerEmail: Optional[str] = None
    reviewTitle: Optional[str] = None
    reviewText: Optional[str] = None
    rating: Optional[Any] = None
    genuineOpinion: Optional[bool] = None

    def missing_fields(self) -> List[str]:
        missing = [
            field for field in ("reviewerName", "reviewerEmail", "reviewText", "rating")
            if not getattr(self, field)
        ]
        # false is a legitimate answer here, only absence counts
        if self.genuineOpinion is None:
            missing.append("genuineOpinion")
        return missing

    def valid_rating(self) -> Optional[int]:
        """Returns the rating as an int when it is a whole number in [1, 5], otherwise None."""
        rating = self.rating
        if isinstance(rating, bool):
            return None
        if isinstance(rating, str):
            try:
                rating = float(rating.strip())
            except ValueError:
                return None
        if isinstance(rating, float):
            if not rating.is_integer():
                return None
            rating = int(rating)
        if isinstance(rating, int) and 1 <= rating <= 5:
            return rating
        return None

class Testimonial(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    reviewer_name: str
    reviewer_email: str
    review_title: Optional[str] = None
    review_text: str
    rating: int
    genuine_opinion: bool
    created_at: Optional[datetime] = None
