from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from homebite.schemas.catalog_schema import CookBrief, MenuItemBrief
from homebite.utils.validation import MAX_ID, MAX_QUANTITY


class AddItemIn(BaseModel):
    user_id: int = Field(..., ge=1, le=MAX_ID)
    menu_item_id: int = Field(..., ge=1, le=MAX_ID)
    quantity: int = Field(..., ge=1, le=MAX_QUANTITY)
    special_instructions: Optional[str] = Field(None, max_length=200)


class UpdateItemIn(BaseModel):
    user_id: int = Field(..., ge=1, le=MAX_ID)
    menu_item_id: int = Field(..., ge=1, le=MAX_ID)
    quantity: int = Field(..., ge=0, le=MAX_QUANTITY)
    special_instructions: Optional[str] = Field(None, max_length=200)


class CartLineOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    menu_item_id: int
    quantity: int
    unit_price_cents: int
    special_instructions: Optional[str] = None
    menu_item: Optional[MenuItemBrief] = None


class CartOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    user_id: int
    cook_profile_id: int
    total_cents: int
    lines: List[CartLineOut]
    cook_profile: Optional[CookBrief] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
