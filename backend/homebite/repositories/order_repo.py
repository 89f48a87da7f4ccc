from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from homebite.models.order import Order
from homebite.utils.validation import MAX_ID


class OrderRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, order_id: int) -> Optional[Order]:
        return self.db.query(Order).filter(Order.id == order_id).first()

    def get_by_number(self, order_number: str) -> Optional[Order]:
        return self.db.query(Order).filter(Order.order_number == order_number).first()

    def get_by_id_or_number(self, ref: str) -> Optional[Order]:
        """An all-digit reference is a primary key, anything else an order number."""
        ref = str(ref).strip()
        if ref.isascii() and ref.isdigit():
            order_id = int(ref)
            if order_id > MAX_ID:
                return None
            return self.get(order_id)
        return self.get_by_number(ref)

    def list(
        self,
        user_id: Optional[int] = None,
        cook_profile_id: Optional[int] = None,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Order], int]:
        query = self.db.query(Order)
        if user_id is not None:
            query = query.filter(Order.user_id == user_id)
        if cook_profile_id is not None:
            query = query.filter(Order.cook_profile_id == cook_profile_id)
        if status:
            query = query.filter(Order.order_status == status)
        total = query.with_entities(func.count(Order.id)).scalar() or 0
        items = (
            query.order_by(Order.created_at.desc(), Order.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return items, total

    def add(self, order: Order) -> Order:
        self.db.add(order)
        self.db.flush()
        return order

    def delete(self, order: Order):
        self.db.delete(order)
        self.db.flush()
