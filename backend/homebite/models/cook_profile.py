from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from homebite.db import Base

PRICE_RANGES = ("$", "$$", "$$$", "$$$$")
WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


class CookProfile(Base):
    __tablename__ = "cook_profiles"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False, index=True)
    business_name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False, default="")
    cuisine = Column(JSON, nullable=False, default=list)
    specialties = Column(JSON, nullable=False, default=list)
    location = Column(String(255), nullable=False, index=True)
    price_range = Column(String(4), nullable=False, default="$$")
    delivery_time = Column(String(64), nullable=False)
    # {"days": [...], "hours": {"start": "HH:MM", "end": "HH:MM"}}
    availability = Column(JSON, nullable=True)
    rating = Column(Float, nullable=False, default=0.0)  # 0..5, recomputed from reviews
    total_orders = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    owner = relationship("User")
    menu_items = relationship("MenuItem", back_populates="cook_profile")

    def __repr__(self):
        return f"<CookProfile id={self.id} business_name={self.business_name}>"
