from typing import Optional

from fastapi import APIRouter, Depends, Header, Query
from sqlalchemy.orm import Session

from homebite.db import get_db
from homebite.schemas.order_schema import (
    CancelOrderIn,
    OrderOut,
    OrderPageOut,
    PlaceOrderIn,
    UpdateOrderIn,
)
from homebite.services.order_service import OrderService
from homebite.utils.validation import MAX_ID

router = APIRouter(tags=["orders"])


@router.post(
    "",
    summary="Place order (checkout)",
    response_model=OrderOut,
    status_code=201,
)
def place_order(
    payload: PlaceOrderIn,
    db: Session = Depends(get_db),
    idempotency_key: Optional[str] = Header(None, alias="Idempotency-Key"),
):
    svc = OrderService(db)
    address = payload.delivery_address.model_dump() if payload.delivery_address else None
    order = svc.place_order(
        payload.user_id,
        address,
        payload.payment_method,
        customer_notes=payload.customer_notes,
        idempotency_key=idempotency_key,
    )
    return OrderOut.model_validate(order)


@router.get("", summary="List orders", response_model=OrderPageOut)
def list_orders(
    user_id: Optional[int] = Query(None, ge=1, le=MAX_ID),
    cook_profile_id: Optional[int] = Query(None, ge=1, le=MAX_ID),
    status: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    svc = OrderService(db)
    items, pagination = svc.list_orders(
        user_id=user_id, cook_profile_id=cook_profile_id, status=status, page=page, limit=limit
    )
    return {"items": [OrderOut.model_validate(o) for o in items], "pagination": pagination}


@router.get("/{ref}", summary="Get order by id or order number", response_model=OrderOut)
def get_order(ref: str, db: Session = Depends(get_db)):
    return OrderOut.model_validate(OrderService(db).get_order(ref))


@router.put("/{ref}", summary="Update order status, payment or notes", response_model=OrderOut)
def update_order(ref: str, payload: UpdateOrderIn, db: Session = Depends(get_db)):
    svc = OrderService(db)
    order = svc.update_order(ref, **payload.model_dump())
    return OrderOut.model_validate(order)


@router.post("/{ref}/cancel", summary="Cancel an order as its customer", response_model=OrderOut)
def cancel_order(ref: str, payload: CancelOrderIn, db: Session = Depends(get_db)):
    svc = OrderService(db)
    order = svc.cancel_order(ref, payload.user_id, payload.reason)
    return OrderOut.model_validate(order)


@router.delete("/{ref}", summary="Delete a placed or cancelled order")
def delete_order(ref: str, db: Session = Depends(get_db)):
    OrderService(db).delete_order(ref)
    return {"ok": True}
