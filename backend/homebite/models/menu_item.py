from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from homebite.db import Base

MENU_CATEGORIES = ("appetizer", "main-course", "dessert", "beverage", "snack", "combo")
ALLERGENS = ("nuts", "dairy", "gluten", "eggs", "soy", "shellfish", "fish", "sesame")
DIETARY_INFO = (
    "vegetarian",
    "vegan",
    "gluten-free",
    "dairy-free",
    "keto",
    "low-carb",
    "high-protein",
)


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    cook_profile_id = Column(Integer, ForeignKey("cook_profiles.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False, default="")
    price_cents = Column(Integer, nullable=False, default=0)
    category = Column(String(32), nullable=False, index=True)
    image = Column(String(512), nullable=False, default="")
    ingredients = Column(JSON, nullable=False, default=list)
    allergens = Column(JSON, nullable=False, default=list)
    dietary_info = Column(JSON, nullable=False, default=list)
    cooking_time = Column(String(64), nullable=False, default="")
    serving_size = Column(String(64), nullable=False, default="")
    available = Column(Boolean, default=True, nullable=False, index=True)
    featured = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    cook_profile = relationship("CookProfile", back_populates="menu_items")

    def __repr__(self):
        return f"<MenuItem id={self.id} name={self.name} available={self.available}>"
