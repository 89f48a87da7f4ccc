from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from homebite.db import Base


class CartLine(Base):
    __tablename__ = "cart_lines"
    id = Column(Integer, primary_key=True, index=True)
    cart_id = Column(
        Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    menu_item_id = Column(Integer, ForeignKey("menu_items.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price_cents = Column(
        Integer, nullable=False, default=0
    )  # price at time of add, in minor units
    special_instructions = Column(String(200), nullable=True)

    cart = relationship("Cart", back_populates="lines")
    menu_item = relationship("MenuItem")
