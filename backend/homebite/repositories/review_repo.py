from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from homebite.models.review import Review


class ReviewRepository:
    def __init__(self, db: Session):
        self.db = db

    def find(self, user_id: int, cook_id: int) -> Optional[Review]:
        return (
            self.db.query(Review)
            .filter(Review.user_id == user_id, Review.cook_id == cook_id)
            .first()
        )

    def list(
        self, cook_id: Optional[int] = None, user_id: Optional[int] = None, limit: int = 100
    ) -> List[Review]:
        query = self.db.query(Review)
        if cook_id is not None:
            query = query.filter(Review.cook_id == cook_id)
        if user_id is not None:
            query = query.filter(Review.user_id == user_id)
        return query.order_by(Review.created_at.desc(), Review.id.desc()).limit(limit).all()

    def rating_totals(self, cook_id: int) -> Tuple[int, int]:
        """(sum of ratings, number of reviews) over every review of the cook."""
        total, count = (
            self.db.query(func.coalesce(func.sum(Review.rating), 0), func.count(Review.id))
            .filter(Review.cook_id == cook_id)
            .one()
        )
        return int(total), int(count)

    def add(self, review: Review) -> Review:
        self.db.add(review)
        self.db.flush()
        return review
