from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from homebite.utils.validation import MAX_ID


class CreateReviewIn(BaseModel):
    user_id: int = Field(..., ge=1, le=MAX_ID)
    user_name: str
    cook_id: int = Field(..., ge=1, le=MAX_ID)
    rating: int
    comment: str


class ReviewOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    user_id: int
    user_name: str
    cook_id: int
    rating: int
    comment: str
    created_at: datetime
