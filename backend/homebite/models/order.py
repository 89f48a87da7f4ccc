import enum
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from homebite.db import Base


class OrderStatus(str, enum.Enum):
    PLACED = "placed"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    OUT_FOR_DELIVERY = "out-for-delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# happy path, in order; cancelled sits outside it
ORDER_FLOW = [
    OrderStatus.PLACED,
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.READY,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
]
CANCELLABLE_STATUSES = {OrderStatus.PLACED, OrderStatus.CONFIRMED}
DELETABLE_STATUSES = {OrderStatus.PLACED, OrderStatus.CANCELLED}
TERMINAL_STATUSES = {OrderStatus.DELIVERED, OrderStatus.CANCELLED}


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    CARD = "card"
    UPI = "upi"
    WALLET = "wallet"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class Order(Base):
    __tablename__ = "orders"
    id = Column(Integer, primary_key=True, autoincrement=True)
    order_number = Column(String(32), unique=True, nullable=False, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    cook_profile_id = Column(Integer, ForeignKey("cook_profiles.id"), nullable=False, index=True)
    total_cents = Column(Integer, nullable=False, default=0)
    delivery_address = Column(JSON, nullable=False)
    payment_method = Column(String(16), nullable=False)
    payment_status = Column(String(16), nullable=False, default=PaymentStatus.PENDING.value, index=True)
    order_status = Column(String(32), nullable=False, default=OrderStatus.PLACED.value, index=True)
    estimated_delivery_time = Column(DateTime(timezone=True), nullable=False)
    actual_delivery_time = Column(DateTime(timezone=True), nullable=True)
    cook_notes = Column(String(500), nullable=True)
    customer_notes = Column(String(500), nullable=True)
    cancellation_reason = Column(String(500), nullable=True)
    created_at = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False, index=True
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    lines = relationship(
        "OrderLine",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderLine.id",
    )
    cook_profile = relationship("CookProfile")


class OrderLine(Base):
    """Snapshot of a cart line; never rewritten after the order is placed."""

    __tablename__ = "order_lines"
    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(
        Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    menu_item_id = Column(Integer, ForeignKey("menu_items.id"), nullable=False)
    name = Column(String(100), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price_cents = Column(Integer, nullable=False)
    special_instructions = Column(String(200), nullable=True)

    order = relationship("Order", back_populates="lines")
    # display only; name and price above are the order's own copy
    menu_item = relationship("MenuItem")
