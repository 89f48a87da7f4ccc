from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship

from homebite.db import Base


class Cart(Base):
    __tablename__ = "carts"
    id = Column(Integer, primary_key=True, index=True)
    # one active cart per user
    user_id = Column(Integer, unique=True, index=True, nullable=False)
    cook_profile_id = Column(Integer, ForeignKey("cook_profiles.id"), nullable=False)
    total_cents = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    lines = relationship(
        "CartLine",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartLine.id",
    )
    cook_profile = relationship("CookProfile")

    def find_line(self, menu_item_id: int):
        return next((l for l in self.lines if l.menu_item_id == menu_item_id), None)

    def recalculate_total(self) -> int:
        self.total_cents = sum(l.unit_price_cents * l.quantity for l in self.lines)
        return self.total_cents
