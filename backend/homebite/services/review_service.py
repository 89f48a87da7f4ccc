import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from homebite.errors import DuplicateReview, NotFound, ValidationError
from homebite.models.review import Review
from homebite.repositories.menu_repo import CookRepository
from homebite.repositories.review_repo import ReviewRepository
from homebite.utils.transactions import transaction
from homebite.utils.validation import require_id

log = logging.getLogger(__name__)

MIN_RATING, MAX_RATING = 1, 5
MIN_COMMENT_LENGTH, MAX_COMMENT_LENGTH = 10, 1000


def average_rating(total: int, count: int) -> float:
    """Mean rating rounded half-up to one decimal; 0.0 for a cook without reviews."""
    if count == 0:
        return 0.0
    mean = Decimal(total) / Decimal(count)
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class ReviewService:
    def __init__(self, db: Session):
        self.db = db
        self.review_repo = ReviewRepository(db)
        self.cook_repo = CookRepository(db)

    def list_reviews(self, cook_id: Optional[int] = None, user_id: Optional[int] = None) -> List[Review]:
        return self.review_repo.list(cook_id=cook_id, user_id=user_id)

    def create_review(
        self, user_id: int, user_name: str, cook_id: int, rating: int, comment: str
    ) -> Review:
        require_id(user_id, "user_id")
        require_id(cook_id, "cook_id")
        user_name = (user_name or "").strip()
        comment = (comment or "").strip()
        if not user_name or not comment:
            raise ValidationError("Missing required fields")
        if len(user_name) > 100:
            raise ValidationError("user_name cannot be more than 100 characters")
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
        if not MIN_COMMENT_LENGTH <= len(comment) <= MAX_COMMENT_LENGTH:
            raise ValidationError(
                f"Comment must be between {MIN_COMMENT_LENGTH} and {MAX_COMMENT_LENGTH} characters"
            )

        try:
            with transaction(self.db):
                cook = self.cook_repo.get(cook_id)
                if not cook:
                    raise NotFound("Cook not found")
                if self.review_repo.find(user_id, cook_id):
                    raise DuplicateReview()

                review = self.review_repo.add(
                    Review(
                        user_id=user_id,
                        user_name=user_name,
                        cook_id=cook_id,
                        rating=rating,
                        comment=comment,
                    )
                )
                # full recomputation over every review of the cook
                total, count = self.review_repo.rating_totals(cook_id)
                cook.rating = average_rating(total, count)
                self.db.flush()
        except IntegrityError:
            # unique (user_id, cook_id) caught a concurrent duplicate
            raise DuplicateReview()

        log.info("review %s by user %s for cook %s, rating now %s", review.id, user_id, cook_id, cook.rating)
        return review
