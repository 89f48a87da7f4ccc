from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from homebite.schemas.review_schema import ReviewOut
from homebite.utils.validation import MAX_ID, MAX_PRICE_CENTS


class HoursSchema(BaseModel):
    start: str = Field(..., min_length=1)
    end: str = Field(..., min_length=1)


class AvailabilitySchema(BaseModel):
    days: List[str]
    hours: HoursSchema


class CookBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    business_name: str
    location: str
    delivery_time: str


class CookOut(CookBrief):
    user_id: int
    description: str
    cuisine: List[str] = []
    specialties: List[str] = []
    price_range: str
    availability: Optional[AvailabilitySchema] = None
    rating: float
    total_orders: int


class MenuItemBrief(BaseModel):
    """Catalog display fields attached to cart and order lines."""

    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    description: str
    image: str
    category: str
    price_cents: int
    available: bool


class MenuItemOut(MenuItemBrief):
    cook_profile_id: int
    ingredients: List[str] = []
    allergens: List[str] = []
    dietary_info: List[str] = []
    cooking_time: str = ""
    serving_size: str = ""
    featured: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CookDetailOut(CookOut):
    menu_items: List[MenuItemOut] = []
    reviews: List[ReviewOut] = []
    review_count: int = 0
    average_rating: float = 0.0


class CreateCookIn(BaseModel):
    user_id: int = Field(..., ge=1, le=MAX_ID)
    business_name: str = Field(..., min_length=1, max_length=100)
    description: str = Field("", max_length=1000)
    cuisine: List[str] = []
    specialties: List[str] = []
    location: str = Field(..., min_length=1)
    price_range: str = "$$"
    delivery_time: str = Field(..., min_length=1)
    availability: Optional[AvailabilitySchema] = None


class CreateMenuItemIn(BaseModel):
    cook_profile_id: int = Field(..., ge=1, le=MAX_ID)
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field("", max_length=500)
    price_cents: int = Field(..., ge=0, le=MAX_PRICE_CENTS)
    category: str
    image: str = ""
    ingredients: List[str] = []
    allergens: List[str] = []
    dietary_info: List[str] = []
    cooking_time: str = Field("", max_length=64)
    serving_size: str = Field("", max_length=64)
    available: bool = True
    featured: bool = False


class UpdateMenuItemIn(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    price_cents: Optional[int] = Field(None, ge=0, le=MAX_PRICE_CENTS)
    category: Optional[str] = None
    image: Optional[str] = None
    ingredients: Optional[List[str]] = None
    allergens: Optional[List[str]] = None
    dietary_info: Optional[List[str]] = None
    cooking_time: Optional[str] = Field(None, max_length=64)
    serving_size: Optional[str] = Field(None, max_length=64)
    available: Optional[bool] = None
    featured: Optional[bool] = None
