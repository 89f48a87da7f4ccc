import logging
import math
import time
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple
from uuid import uuid4

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from homebite.config import settings
from homebite.errors import (
    EmptyCart,
    ItemUnavailable,
    NotFound,
    StateConflict,
    ValidationError,
)
from homebite.models.order import (
    CANCELLABLE_STATUSES,
    DELETABLE_STATUSES,
    ORDER_FLOW,
    TERMINAL_STATUSES,
    Order,
    OrderLine,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)
from homebite.repositories.cart_repo import CartRepository
from homebite.repositories.idempotency_repo import IdempotencyRepository
from homebite.repositories.menu_repo import MenuRepository
from homebite.repositories.order_repo import OrderRepository
from homebite.utils.locks import user_lock
from homebite.utils.transactions import transaction
from homebite.utils.validation import (
    MAX_ID,
    require_id,
    validate_choice,
    validate_delivery_address,
    validate_note,
)

log = logging.getLogger(__name__)

ORDER_STATUSES = [s.value for s in OrderStatus]
PAYMENT_METHODS = [m.value for m in PaymentMethod]
PAYMENT_STATUSES = [s.value for s in PaymentStatus]


def initial_payment_status(payment_method: str) -> str:
    # no gateway: non-cash methods are trusted to have been paid up front
    if payment_method == PaymentMethod.CASH.value:
        return PaymentStatus.PENDING.value
    return PaymentStatus.PAID.value


class OrderService:
    def __init__(self, db: Session):
        self.db = db
        self.cart_repo = CartRepository(db)
        self.menu_repo = MenuRepository(db)
        self.order_repo = OrderRepository(db)
        self.idem_repo = IdempotencyRepository(db)

    def _gen_order_number(self) -> str:
        millis = str(int(time.time() * 1000))
        return f"{settings.ORDER_NUMBER_PREFIX}{millis[-6:]}{uuid4().hex[:5].upper()}"

    # ------------------------------------------------------------------
    # checkout
    # ------------------------------------------------------------------

    def place_order(
        self,
        user_id: int,
        delivery_address: Optional[Dict],
        payment_method: Optional[str],
        customer_notes: Optional[str] = None,
        idempotency_key: Optional[str] = None,
    ) -> Order:
        """
        Convert the user's cart into an order.

        Availability of every line is re-checked against the catalog at this
        point, since carts are not locked between add-to-cart and checkout.
        Order insert, cart delete and the idempotency record commit together;
        a retried request carrying the same key gets the original order back.
        """
        require_id(user_id, "user_id")
        address = validate_delivery_address(delivery_address)
        payment_method = validate_choice(payment_method, "payment_method", PAYMENT_METHODS)
        customer_notes = validate_note(customer_notes, "customer_notes")
        if idempotency_key is not None:
            idempotency_key = idempotency_key.strip()
            if not idempotency_key or len(idempotency_key) > 128:
                raise ValidationError("Idempotency-Key must be 1-128 characters")

        attempt = 0
        while True:
            try:
                with user_lock(user_id):
                    return self._checkout(
                        user_id, address, payment_method, customer_notes, idempotency_key
                    )
            except IntegrityError:
                # a concurrent request with the same key committed first
                replay = self._replay(idempotency_key, user_id) if idempotency_key else None
                if replay is None:
                    raise
                return replay
            except OperationalError:
                attempt += 1
                if attempt > settings.CHECKOUT_MAX_RETRIES:
                    raise
                log.warning(
                    "checkout for user %s hit a storage error, retrying (%s/%s)",
                    user_id,
                    attempt,
                    settings.CHECKOUT_MAX_RETRIES,
                )

    def _replay(self, idempotency_key: str, user_id: int) -> Optional[Order]:
        rec = self.idem_repo.get(idempotency_key)
        if not rec:
            return None
        if rec.user_id != user_id:
            raise ValidationError("Idempotency-Key was already used for another user")
        order = self.order_repo.get(rec.order_id) if rec.order_id else None
        if order:
            log.info("checkout replayed for key=%r -> order %s", idempotency_key, order.order_number)
        return order

    def _checkout(
        self,
        user_id: int,
        address: Dict[str, str],
        payment_method: str,
        customer_notes: Optional[str],
        idempotency_key: Optional[str],
    ) -> Order:
        with transaction(self.db):
            if idempotency_key:
                replay = self._replay(idempotency_key, user_id)
                if replay:
                    return replay

            cart = self.cart_repo.get_by_user(user_id)
            if not cart or not cart.lines:
                raise EmptyCart()

            menu_items = self.menu_repo.get_many(l.menu_item_id for l in cart.lines)
            for line in cart.lines:
                item = menu_items.get(line.menu_item_id)
                if item is None:
                    raise ItemUnavailable(f"Menu item {line.menu_item_id}")
                if not item.available:
                    raise ItemUnavailable(item.name)

            now = datetime.now(timezone.utc)
            order = Order(
                order_number=self._gen_order_number(),
                user_id=user_id,
                cook_profile_id=cart.cook_profile_id,
                delivery_address=address,
                payment_method=payment_method,
                payment_status=initial_payment_status(payment_method),
                order_status=OrderStatus.PLACED.value,
                estimated_delivery_time=now + timedelta(minutes=settings.DELIVERY_ETA_MINUTES),
                customer_notes=customer_notes,
                created_at=now,
                updated_at=now,
            )
            for line in cart.lines:
                order.lines.append(
                    OrderLine(
                        menu_item_id=line.menu_item_id,
                        name=menu_items[line.menu_item_id].name,
                        quantity=line.quantity,
                        unit_price_cents=line.unit_price_cents,
                        special_instructions=line.special_instructions,
                    )
                )
            order.total_cents = sum(l.unit_price_cents * l.quantity for l in order.lines)

            self.order_repo.add(order)
            self.cart_repo.delete(cart)
            if idempotency_key:
                self.idem_repo.record(idempotency_key, "place_order", user_id, order.id)

        log.info(
            "order %s placed by user %s: %d lines, total_cents=%s, payment=%s",
            order.order_number,
            user_id,
            len(order.lines),
            order.total_cents,
            payment_method,
        )
        return order

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------

    def get_order(self, ref: str) -> Order:
        order = self.order_repo.get_by_id_or_number(ref)
        if not order:
            raise NotFound("Order not found")
        return order

    def list_orders(
        self,
        user_id: Optional[int] = None,
        cook_profile_id: Optional[int] = None,
        status: Optional[str] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> Tuple[List[Order], Dict[str, int]]:
        if user_id is not None:
            require_id(user_id, "user_id")
        if cook_profile_id is not None:
            require_id(cook_profile_id, "cook_profile_id")
        if status:
            validate_choice(status, "status", ORDER_STATUSES)
        limit = settings.DEFAULT_PAGE_SIZE if limit is None else limit
        if page < 1:
            raise ValidationError("page must be at least 1")
        if limit < 1 or limit > settings.MAX_PAGE_SIZE:
            raise ValidationError(f"limit must be between 1 and {settings.MAX_PAGE_SIZE}")
        if (page - 1) * limit > MAX_ID:
            raise ValidationError("page is out of range")

        items, total = self.order_repo.list(
            user_id=user_id, cook_profile_id=cook_profile_id, status=status, page=page, limit=limit
        )
        pagination = {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit),
        }
        return items, pagination

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------

    def _transition(self, order: Order, target: OrderStatus) -> None:
        current = OrderStatus(order.order_status)
        if target == current:
            return
        if current in TERMINAL_STATUSES:
            raise StateConflict(f"Order is already {current.value}")
        if target == OrderStatus.CANCELLED:
            if current not in CANCELLABLE_STATUSES:
                raise StateConflict(f"Order cannot be cancelled once it is {current.value}")
        elif ORDER_FLOW.index(target) < ORDER_FLOW.index(current):
            raise StateConflict(
                f"Order cannot move back from {current.value} to {target.value}"
            )

        order.order_status = target.value
        if target == OrderStatus.DELIVERED and not order.actual_delivery_time:
            order.actual_delivery_time = datetime.now(timezone.utc)
        log.info("order %s: %s -> %s", order.order_number, current.value, target.value)

    def update_order(
        self,
        ref: str,
        order_status: Optional[str] = None,
        payment_status: Optional[str] = None,
        cook_notes: Optional[str] = None,
        cancellation_reason: Optional[str] = None,
        actual_delivery_time: Optional[datetime] = None,
    ) -> Order:
        """
        Cook/operator side update; any forward status jump is accepted.
        Empty status values are treated as not supplied.
        """
        if order_status:
            validate_choice(order_status, "order_status", ORDER_STATUSES)
        if payment_status:
            validate_choice(payment_status, "payment_status", PAYMENT_STATUSES)
        cook_notes = validate_note(cook_notes, "cook_notes")
        cancellation_reason = validate_note(cancellation_reason, "cancellation_reason")

        with transaction(self.db):
            order = self.get_order(ref)
            if order_status:
                self._transition(order, OrderStatus(order_status))
            if payment_status:
                order.payment_status = payment_status
            if cook_notes is not None:
                order.cook_notes = cook_notes
            if cancellation_reason is not None:
                order.cancellation_reason = cancellation_reason
            if actual_delivery_time:
                order.actual_delivery_time = actual_delivery_time
            self.db.flush()
        return order

    def cancel_order(self, ref: str, user_id: int, reason: Optional[str] = None) -> Order:
        """Customer side cancellation, allowed while the order is placed or confirmed."""
        require_id(user_id, "user_id")
        reason = validate_note(reason, "cancellation_reason")

        with transaction(self.db):
            order = self.get_order(ref)
            if order.user_id != user_id:
                # don't reveal other users' orders
                raise NotFound("Order not found")
            self._transition(order, OrderStatus.CANCELLED)
            if reason:
                order.cancellation_reason = reason
            self.db.flush()
        return order

    def delete_order(self, ref: str) -> None:
        with transaction(self.db):
            order = self.get_order(ref)
            order_number = order.order_number
            if OrderStatus(order.order_status) not in DELETABLE_STATUSES:
                raise StateConflict("Order cannot be deleted in current status")
            self.idem_repo.delete_for_order(order.id)
            self.order_repo.delete(order)
        log.info("order %s deleted", order_number)
