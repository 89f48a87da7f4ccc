from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from homebite.models.cook_profile import CookProfile
from homebite.models.menu_item import MenuItem
from homebite.models.order import OrderLine


class MenuRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, menu_item_id: int) -> Optional[MenuItem]:
        return self.db.query(MenuItem).filter(MenuItem.id == menu_item_id).first()

    def get_many(self, ids: Iterable[int]) -> Dict[int, MenuItem]:
        """Fresh rows for the given ids, keyed by id; missing ids are simply absent."""
        ids = list(set(ids))
        if not ids:
            return {}
        rows = (
            self.db.query(MenuItem)
            .filter(MenuItem.id.in_(ids))
            .populate_existing()
            .all()
        )
        return {m.id: m for m in rows}

    def list(
        self,
        cook_profile_id: Optional[int] = None,
        category: Optional[str] = None,
        available: Optional[bool] = None,
    ) -> List[MenuItem]:
        query = self.db.query(MenuItem)
        if cook_profile_id is not None:
            query = query.filter(MenuItem.cook_profile_id == cook_profile_id)
        if category:
            query = query.filter(MenuItem.category == category)
        if available is not None:
            query = query.filter(MenuItem.available == available)
        return query.order_by(MenuItem.featured.desc(), MenuItem.created_at.desc(), MenuItem.id.desc()).all()

    def add(self, item: MenuItem) -> MenuItem:
        self.db.add(item)
        self.db.flush()
        return item

    def is_ordered(self, menu_item_id: int) -> bool:
        return (
            self.db.query(OrderLine.id).filter(OrderLine.menu_item_id == menu_item_id).first()
            is not None
        )

    def delete(self, item: MenuItem):
        self.db.delete(item)
        self.db.flush()


class CookRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, cook_profile_id: int) -> Optional[CookProfile]:
        return self.db.query(CookProfile).filter(CookProfile.id == cook_profile_id).first()

    def get_by_user(self, user_id: int) -> Optional[CookProfile]:
        return self.db.query(CookProfile).filter(CookProfile.user_id == user_id).first()

    def list(self) -> List[CookProfile]:
        return self.db.query(CookProfile).order_by(CookProfile.rating.desc(), CookProfile.id).all()

    def add(self, profile: CookProfile) -> CookProfile:
        self.db.add(profile)
        self.db.flush()
        return profile
