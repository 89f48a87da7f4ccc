from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from homebite.schemas.catalog_schema import CookBrief, MenuItemBrief
from homebite.utils.validation import MAX_ID


class DeliveryAddressIn(BaseModel):
    # presence of the required parts is checked by the order service so the
    # error names the missing field
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    landmark: Optional[str] = None
    contact_number: Optional[str] = None


class PlaceOrderIn(BaseModel):
    user_id: int = Field(..., ge=1, le=MAX_ID)
    delivery_address: Optional[DeliveryAddressIn] = None
    payment_method: Optional[str] = None
    customer_notes: Optional[str] = Field(None, max_length=500)


class UpdateOrderIn(BaseModel):
    order_status: Optional[str] = None
    payment_status: Optional[str] = None
    cook_notes: Optional[str] = Field(None, max_length=500)
    cancellation_reason: Optional[str] = Field(None, max_length=500)
    actual_delivery_time: Optional[datetime] = None


class CancelOrderIn(BaseModel):
    user_id: int = Field(..., ge=1, le=MAX_ID)
    reason: Optional[str] = Field(None, max_length=500)


class DeliveryAddressOut(BaseModel):
    street: str
    city: str
    state: str
    postal_code: str
    landmark: Optional[str] = None
    contact_number: str


class OrderLineOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    menu_item_id: int
    name: str
    quantity: int
    unit_price_cents: int
    special_instructions: Optional[str] = None
    menu_item: Optional[MenuItemBrief] = None


class OrderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    order_number: str
    user_id: int
    cook_profile_id: int
    lines: List[OrderLineOut]
    total_cents: int
    delivery_address: DeliveryAddressOut
    payment_method: str
    payment_status: str
    order_status: str
    estimated_delivery_time: datetime
    actual_delivery_time: Optional[datetime] = None
    cook_notes: Optional[str] = None
    customer_notes: Optional[str] = None
    cancellation_reason: Optional[str] = None
    cook_profile: Optional[CookBrief] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class OrderPageOut(BaseModel):
    items: List[OrderOut]
    pagination: Dict[str, int]
