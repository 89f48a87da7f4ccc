import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from homebite.models.cook_profile import CookProfile
from homebite.models.menu_item import MenuItem
from homebite.models.user import User, UserRole
from homebite.repositories.menu_repo import CookRepository, MenuRepository
from homebite.repositories.user_repo import UserRepository
from homebite.services.auth_service import hash_password
from homebite.utils.transactions import transaction

log = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"

DEMO_COOKS: List[Dict] = [
    {
        "user": {"name": "Meera Iyer", "email": "meera@homebite.example.com"},
        "profile": {
            "business_name": "Meera's Kitchen",
            "description": "Home-style South Indian meals cooked fresh every day.",
            "location": "Koramangala, Bengaluru",
            "delivery_time": "30-45 mins",
            "cuisine": ["South Indian"],
            "specialties": ["Dosa", "Filter coffee"],
            "price_range": "$",
            "availability": {
                "days": ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday"],
                "hours": {"start": "07:00", "end": "14:00"},
            },
        },
        "menu": [
            {
                "name": "Masala Dosa",
                "price_cents": 12000,
                "category": "main-course",
                "featured": True,
                "dietary_info": ["vegetarian"],
                "cooking_time": "15 mins",
                "serving_size": "1 dosa with chutney and sambar",
            },
            {"name": "Idli Sambar", "price_cents": 8000, "category": "main-course"},
            {"name": "Filter Coffee", "price_cents": 4000, "category": "beverage"},
            {"name": "Payasam", "price_cents": 6000, "category": "dessert"},
        ],
    },
    {
        "user": {"name": "Arjun Singh", "email": "arjun@homebite.example.com"},
        "profile": {
            "business_name": "Punjabi Tadka",
            "description": "Rich North Indian curries and breads from a family recipe book.",
            "location": "Indiranagar, Bengaluru",
            "delivery_time": "40-60 mins",
            "cuisine": ["North Indian", "Punjabi"],
            "specialties": ["Dal Makhani"],
            "price_range": "$$",
        },
        "menu": [
            {"name": "Dal Makhani", "price_cents": 18000, "category": "main-course", "featured": True},
            {
                "name": "Paneer Tikka",
                "price_cents": 22000,
                "category": "appetizer",
                "allergens": ["dairy"],
                "dietary_info": ["vegetarian", "high-protein"],
            },
            {"name": "Lassi", "price_cents": 7000, "category": "beverage"},
        ],
    },
]

DEMO_CUSTOMERS: List[Dict] = [
    {"name": "Demo Customer", "email": "customer@homebite.example.com"},
]


def _ensure_user(repo: UserRepository, name: str, email: str, role: str) -> User:
    user = repo.get_by_email(email)
    if user:
        return user
    return repo.add(
        User(name=name, email=email, password_hash=hash_password(DEMO_PASSWORD), role=role)
    )


def seed_demo_data(db: Session, cooks: Optional[List[Dict]] = None) -> Dict[str, int]:
    """
    Create demo cooks, their menus and a customer. Safe to run repeatedly:
    users are matched by email, profiles by owner, menu items by name.
    Returns how many rows of each kind were created.
    """
    cooks = DEMO_COOKS if cooks is None else cooks
    users = UserRepository(db)
    cook_repo = CookRepository(db)
    menu_repo = MenuRepository(db)
    created = {"users": 0, "cooks": 0, "menu_items": 0}

    with transaction(db):
        for spec in DEMO_CUSTOMERS:
            if not users.get_by_email(spec["email"]):
                _ensure_user(users, spec["name"], spec["email"], UserRole.USER.value)
                created["users"] += 1

        for spec in cooks:
            if not users.get_by_email(spec["user"]["email"]):
                created["users"] += 1
            owner = _ensure_user(users, spec["user"]["name"], spec["user"]["email"], UserRole.COOK.value)

            profile = cook_repo.get_by_user(owner.id)
            if not profile:
                profile = cook_repo.add(CookProfile(user_id=owner.id, **spec["profile"]))
                created["cooks"] += 1

            existing = {m.name for m in menu_repo.list(cook_profile_id=profile.id)}
            for item in spec["menu"]:
                if item["name"] in existing:
                    continue
                menu_repo.add(MenuItem(cook_profile_id=profile.id, **item))
                created["menu_items"] += 1

    log.info("seed_demo_data: created %s", created)
    return created
