from typing import Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from homebite.db import get_db
from homebite.schemas.cart_schema import AddItemIn, CartOut, UpdateItemIn
from homebite.services.cart_service import CartService
from homebite.utils.validation import MAX_ID

router = APIRouter(prefix="/api/cart", tags=["cart"])


def _out(cart) -> Optional[CartOut]:
    return CartOut.model_validate(cart) if cart else None


@router.get("", summary="Get cart", response_model=Optional[CartOut])
def get_cart(user_id: int = Query(..., ge=1, le=MAX_ID), db: Session = Depends(get_db)):
    return _out(CartService(db).get(user_id))


@router.post("", summary="Add item to cart", response_model=CartOut)
def add_item(payload: AddItemIn, db: Session = Depends(get_db)):
    svc = CartService(db)
    cart = svc.add_item(
        payload.user_id, payload.menu_item_id, payload.quantity, payload.special_instructions
    )
    return _out(cart)


@router.put("", summary="Update or remove a cart line", response_model=Optional[CartOut])
def update_item(payload: UpdateItemIn, db: Session = Depends(get_db)):
    svc = CartService(db)
    cart = svc.update_item(
        payload.user_id, payload.menu_item_id, payload.quantity, payload.special_instructions
    )
    return _out(cart)


@router.delete("/items/{menu_item_id}", summary="Remove item", response_model=Optional[CartOut])
def remove_item(
    menu_item_id: int = Path(..., ge=1, le=MAX_ID),
    user_id: int = Query(..., ge=1, le=MAX_ID),
    db: Session = Depends(get_db),
):
    return _out(CartService(db).remove_item(user_id, menu_item_id))


@router.delete("", summary="Clear cart")
def clear_cart(user_id: int = Query(..., ge=1, le=MAX_ID), db: Session = Depends(get_db)):
    CartService(db).clear(user_id)
    return {"ok": True}
