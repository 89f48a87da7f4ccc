from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from homebite.db import get_db
from homebite.schemas.catalog_schema import (
    CookDetailOut,
    CookOut,
    CreateCookIn,
    CreateMenuItemIn,
    MenuItemOut,
    UpdateMenuItemIn,
)
from homebite.schemas.review_schema import ReviewOut
from homebite.services.catalog_service import CatalogService
from homebite.utils.validation import MAX_ID

cooks_router = APIRouter(prefix="/api/cooks", tags=["catalogue"])
menu_router = APIRouter(prefix="/api/menu", tags=["catalogue"])


@cooks_router.get("", summary="List cooks", response_model=List[CookOut])
def list_cooks(db: Session = Depends(get_db)):
    return [CookOut.model_validate(c) for c in CatalogService(db).list_cooks()]


# declared before /{cook_profile_id} so "profile" is not parsed as an id
@cooks_router.get("/profile", summary="Get a cook profile by its owner", response_model=CookOut)
def get_cook_by_user(user_id: int = Query(..., ge=1, le=MAX_ID), db: Session = Depends(get_db)):
    return CookOut.model_validate(CatalogService(db).get_cook_by_user(user_id))


@cooks_router.get(
    "/{cook_profile_id}", summary="Get cook with menu and reviews", response_model=CookDetailOut
)
def get_cook(
    cook_profile_id: int = Path(..., ge=1, le=MAX_ID), db: Session = Depends(get_db)
):
    svc = CatalogService(db)
    cook = svc.get_cook(cook_profile_id)
    reviews, review_count, rating = svc.get_cook_reviews(cook)
    out = CookDetailOut.model_validate(cook)
    out.menu_items = [
        MenuItemOut.model_validate(m) for m in svc.list_menu_items(cook_profile_id=cook.id)
    ]
    out.reviews = [ReviewOut.model_validate(r) for r in reviews]
    out.review_count = review_count
    out.average_rating = rating
    return out


@cooks_router.post(
    "", summary="Create cook profile", response_model=CookOut, status_code=status.HTTP_201_CREATED
)
def create_cook(payload: CreateCookIn, db: Session = Depends(get_db)):
    profile = CatalogService(db).create_cook_profile(**payload.model_dump())
    return CookOut.model_validate(profile)


@menu_router.get("", summary="List menu items", response_model=List[MenuItemOut])
def list_menu(
    cook_profile_id: Optional[int] = Query(None, ge=1, le=MAX_ID),
    category: Optional[str] = Query(None),
    available: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
):
    items = CatalogService(db).list_menu_items(
        cook_profile_id=cook_profile_id, category=category, available=available
    )
    return [MenuItemOut.model_validate(m) for m in items]


@menu_router.get("/{menu_item_id}", summary="Get menu item", response_model=MenuItemOut)
def get_menu_item(menu_item_id: int = Path(..., ge=1, le=MAX_ID), db: Session = Depends(get_db)):
    return MenuItemOut.model_validate(CatalogService(db).get_menu_item(menu_item_id))


@menu_router.post(
    "", summary="Add menu item", response_model=MenuItemOut, status_code=status.HTTP_201_CREATED
)
def create_menu_item(payload: CreateMenuItemIn, db: Session = Depends(get_db)):
    item = CatalogService(db).create_menu_item(**payload.model_dump())
    return MenuItemOut.model_validate(item)


@menu_router.put("/{menu_item_id}", summary="Update menu item", response_model=MenuItemOut)
def update_menu_item(
    payload: UpdateMenuItemIn,
    menu_item_id: int = Path(..., ge=1, le=MAX_ID),
    db: Session = Depends(get_db),
):
    item = CatalogService(db).update_menu_item(
        menu_item_id, payload.model_dump(exclude_unset=True)
    )
    return MenuItemOut.model_validate(item)


@menu_router.delete("/{menu_item_id}", summary="Delete menu item")
def delete_menu_item(
    menu_item_id: int = Path(..., ge=1, le=MAX_ID), db: Session = Depends(get_db)
):
    CatalogService(db).delete_menu_item(menu_item_id)
    return {"ok": True}
