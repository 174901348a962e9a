# homehelp/modules/reviews/schemas.py

from pydantic import BaseModel, Field
from typing import Optional


class ReviewCreate(BaseModel):
    booking_id: str
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=2000)
