import logging
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from homebite.errors import Conflict, NotACook, NotFound, StateConflict, ValidationError
from homebite.models.cook_profile import PRICE_RANGES, WEEKDAYS, CookProfile
from homebite.models.menu_item import ALLERGENS, DIETARY_INFO, MENU_CATEGORIES, MenuItem
from homebite.models.review import Review
from homebite.models.user import UserRole
from homebite.repositories.cart_repo import CartRepository
from homebite.repositories.menu_repo import CookRepository, MenuRepository
from homebite.repositories.review_repo import ReviewRepository
from homebite.repositories.user_repo import UserRepository
from homebite.services.review_service import average_rating
from homebite.utils.transactions import transaction
from homebite.utils.validation import require_id, validate_choice

log = logging.getLogger(__name__)

# fields a cook may edit on an existing menu item
MENU_ITEM_FIELDS = (
    "name",
    "description",
    "price_cents",
    "category",
    "image",
    "ingredients",
    "allergens",
    "dietary_info",
    "cooking_time",
    "serving_size",
    "available",
    "featured",
)

# how many of a cook's latest reviews the detail view carries
COOK_DETAIL_REVIEWS = 50


def _clean_list(values: Optional[Iterable[str]], field: str, choices=None) -> List[str]:
    cleaned = []
    for value in values or []:
        value = (value or "").strip()
        if not value:
            continue
        if choices is not None:
            validate_choice(value, field, choices)
        if value not in cleaned:
            cleaned.append(value)
    return cleaned


def _clean_availability(availability: Optional[Dict]) -> Optional[Dict]:
    if availability is None:
        return None
    days = _clean_list(availability.get("days"), "availability.days", WEEKDAYS)
    if not days:
        raise ValidationError("availability.days needs at least one day")
    hours = availability.get("hours") or {}
    start = (hours.get("start") or "").strip()
    end = (hours.get("end") or "").strip()
    if not start or not end:
        raise ValidationError("availability.hours needs a start and an end")
    return {"days": days, "hours": {"start": start, "end": end}}


class CatalogService:
    """Cook profiles and menu items; the lookup side used by carts and checkout."""

    def __init__(self, db: Session):
        self.db = db
        self.menu_repo = MenuRepository(db)
        self.cook_repo = CookRepository(db)
        self.cart_repo = CartRepository(db)
        self.review_repo = ReviewRepository(db)
        self.user_repo = UserRepository(db)

    # --- lookups -------------------------------------------------------------

    def get_menu_item(self, menu_item_id: int) -> MenuItem:
        item = self.menu_repo.get(menu_item_id)
        if not item:
            raise NotFound("Menu item not found")
        return item

    def get_cook(self, cook_profile_id: int) -> CookProfile:
        cook = self.cook_repo.get(cook_profile_id)
        if not cook:
            raise NotFound("Cook not found")
        return cook

    def get_cook_by_user(self, user_id: int) -> CookProfile:
        require_id(user_id, "user_id")
        cook = self.cook_repo.get_by_user(user_id)
        if not cook:
            raise NotFound("Cook profile not found")
        return cook

    def get_cook_reviews(self, cook: CookProfile) -> Tuple[List[Review], int, float]:
        """Latest reviews, the review count and the mean over every review."""
        reviews = self.review_repo.list(cook_id=cook.id, limit=COOK_DETAIL_REVIEWS)
        total, count = self.review_repo.rating_totals(cook.id)
        rating = average_rating(total, count) if count else cook.rating
        return reviews, count, rating

    def list_cooks(self) -> List[CookProfile]:
        return self.cook_repo.list()

    def list_menu_items(
        self,
        cook_profile_id: Optional[int] = None,
        category: Optional[str] = None,
        available: Optional[bool] = None,
    ) -> List[MenuItem]:
        if category:
            validate_choice(category, "category", MENU_CATEGORIES)
        return self.menu_repo.list(
            cook_profile_id=cook_profile_id, category=category, available=available
        )

    # --- cook side -----------------------------------------------------------

    def create_cook_profile(
        self,
        user_id: int,
        business_name: str,
        location: str,
        delivery_time: str,
        description: str = "",
        cuisine: Optional[List[str]] = None,
        specialties: Optional[List[str]] = None,
        price_range: str = "$$",
        availability: Optional[Dict] = None,
    ) -> CookProfile:
        validate_choice(price_range, "price_range", PRICE_RANGES)
        cuisine = _clean_list(cuisine, "cuisine")
        specialties = _clean_list(specialties, "specialties")
        availability = _clean_availability(availability)

        try:
            with transaction(self.db):
                user = self.user_repo.get(user_id)
                if not user:
                    raise NotFound("User not found")
                if user.role != UserRole.COOK.value:
                    raise NotACook()
                if self.cook_repo.get_by_user(user_id):
                    raise Conflict("A cook profile already exists for this user")

                profile = self.cook_repo.add(
                    CookProfile(
                        user_id=user_id,
                        business_name=business_name.strip(),
                        description=(description or "").strip(),
                        cuisine=cuisine,
                        specialties=specialties,
                        location=location.strip(),
                        price_range=price_range,
                        delivery_time=delivery_time.strip(),
                        availability=availability,
                    )
                )
        except IntegrityError:
            # unique user_id caught a concurrent second profile
            raise Conflict("A cook profile already exists for this user")

        log.info("cook profile %s created for user %s", profile.id, user_id)
        return profile

    def create_menu_item(
        self,
        cook_profile_id: int,
        name: str,
        price_cents: int,
        category: str,
        description: str = "",
        image: str = "",
        ingredients: Optional[List[str]] = None,
        allergens: Optional[List[str]] = None,
        dietary_info: Optional[List[str]] = None,
        cooking_time: str = "",
        serving_size: str = "",
        available: bool = True,
        featured: bool = False,
    ) -> MenuItem:
        self.get_cook(cook_profile_id)
        validate_choice(category, "category", MENU_CATEGORIES)
        if price_cents < 0:
            raise ValidationError("Price cannot be negative")

        with transaction(self.db):
            item = self.menu_repo.add(
                MenuItem(
                    cook_profile_id=cook_profile_id,
                    name=name.strip(),
                    description=(description or "").strip(),
                    price_cents=price_cents,
                    category=category,
                    image=image or "",
                    ingredients=_clean_list(ingredients, "ingredients"),
                    allergens=_clean_list(allergens, "allergens", ALLERGENS),
                    dietary_info=_clean_list(dietary_info, "dietary_info", DIETARY_INFO),
                    cooking_time=(cooking_time or "").strip(),
                    serving_size=(serving_size or "").strip(),
                    available=available,
                    featured=featured,
                )
            )
        return item

    def update_menu_item(self, menu_item_id: int, changes: Dict) -> MenuItem:
        """Apply a partial update. Placed orders keep their own snapshot of name/price."""
        item = self.get_menu_item(menu_item_id)
        unknown = set(changes) - set(MENU_ITEM_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown menu item fields: {', '.join(sorted(unknown))}")
        changes = {k: v for k, v in changes.items() if v is not None}
        if "category" in changes:
            validate_choice(changes["category"], "category", MENU_CATEGORIES)
        if changes.get("price_cents", 0) < 0:
            raise ValidationError("Price cannot be negative")
        if "ingredients" in changes:
            changes["ingredients"] = _clean_list(changes["ingredients"], "ingredients")
        if "allergens" in changes:
            changes["allergens"] = _clean_list(changes["allergens"], "allergens", ALLERGENS)
        if "dietary_info" in changes:
            changes["dietary_info"] = _clean_list(
                changes["dietary_info"], "dietary_info", DIETARY_INFO
            )

        with transaction(self.db):
            for field, value in changes.items():
                setattr(item, field, value)
            self.db.flush()
        return item

    def delete_menu_item(self, menu_item_id: int) -> None:
        """
        Remove an item from the menu and from every cart holding it.
        Items that appear on placed orders stay; mark them unavailable instead.
        """
        with transaction(self.db):
            item = self.get_menu_item(menu_item_id)
            if self.menu_repo.is_ordered(item.id):
                raise StateConflict(
                    "Menu item appears on placed orders; mark it unavailable instead"
                )
            for cart in self.cart_repo.list_holding_item(item.id):
                self.cart_repo.remove_line(cart, cart.find_line(item.id))
                if cart.lines:
                    cart.recalculate_total()
                else:
                    self.cart_repo.delete(cart)
            self.menu_repo.delete(item)
        log.info("menu item %s deleted", menu_item_id)
