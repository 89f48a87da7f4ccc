from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from homebite.db import get_db
from homebite.schemas.review_schema import CreateReviewIn, ReviewOut
from homebite.services.review_service import ReviewService
from homebite.utils.validation import MAX_ID

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.post("", summary="Review a cook", response_model=ReviewOut, status_code=status.HTTP_201_CREATED)
def create_review(payload: CreateReviewIn, db: Session = Depends(get_db)):
    review = ReviewService(db).create_review(**payload.model_dump())
    return ReviewOut.model_validate(review)


@router.get("", summary="List reviews", response_model=List[ReviewOut])
def list_reviews(
    cook_id: Optional[int] = Query(None, ge=1, le=MAX_ID),
    user_id: Optional[int] = Query(None, ge=1, le=MAX_ID),
    db: Session = Depends(get_db),
):
    return [ReviewOut.model_validate(r) for r in ReviewService(db).list_reviews(cook_id, user_id)]
