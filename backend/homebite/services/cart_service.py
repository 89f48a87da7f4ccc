import logging
from typing import Optional

from sqlalchemy.orm import Session

from homebite.errors import CrossCookConflict, NotFound, Unavailable
from homebite.models.cart import Cart
from homebite.repositories.cart_repo import CartRepository
from homebite.repositories.menu_repo import MenuRepository
from homebite.utils.locks import user_lock
from homebite.utils.transactions import transaction
from homebite.utils.validation import (
    require_id,
    validate_quantity,
    validate_special_instructions,
)

log = logging.getLogger(__name__)


class CartService:
    def __init__(self, db: Session):
        self.db = db
        self.cart_repo = CartRepository(db)
        self.menu_repo = MenuRepository(db)

    def get(self, user_id: int) -> Optional[Cart]:
        """The user's cart, or None when they have nothing in it."""
        require_id(user_id, "user_id")
        return self.cart_repo.get_by_user(user_id)

    def add_item(
        self,
        user_id: int,
        menu_item_id: int,
        quantity: int,
        special_instructions: Optional[str] = None,
    ) -> Cart:
        require_id(user_id, "user_id")
        require_id(menu_item_id, "menu_item_id")
        validate_quantity(quantity, minimum=1)
        special_instructions = validate_special_instructions(special_instructions)

        with user_lock(user_id), transaction(self.db):
            menu_item = self.menu_repo.get(menu_item_id)
            if not menu_item:
                raise NotFound("Menu item not found")
            if not menu_item.available:
                raise Unavailable()

            cart = self.cart_repo.get_by_user(user_id)
            if cart is None:
                cart = self.cart_repo.create(user_id, menu_item.cook_profile_id)
            elif cart.cook_profile_id != menu_item.cook_profile_id:
                raise CrossCookConflict()

            line = cart.find_line(menu_item_id)
            if line:
                line.quantity = validate_quantity(line.quantity + quantity)
                line.unit_price_cents = menu_item.price_cents
                if special_instructions:
                    line.special_instructions = special_instructions
            else:
                self.cart_repo.add_line(
                    cart,
                    menu_item_id,
                    quantity,
                    menu_item.price_cents,
                    special_instructions,
                )
            cart.recalculate_total()
            self.db.flush()
        return cart

    def update_item(
        self,
        user_id: int,
        menu_item_id: int,
        quantity: int,
        special_instructions: Optional[str] = None,
    ) -> Optional[Cart]:
        """
        Set a line's quantity. Zero removes the line; removing the last line
        deletes the cart and returns None.
        """
        require_id(user_id, "user_id")
        require_id(menu_item_id, "menu_item_id")
        validate_quantity(quantity, minimum=0)
        special_instructions = validate_special_instructions(special_instructions)

        with user_lock(user_id), transaction(self.db):
            cart = self.cart_repo.get_by_user(user_id)
            if not cart:
                raise NotFound("Cart not found")
            line = cart.find_line(menu_item_id)
            if not line:
                raise NotFound("Item not found in cart")

            if quantity == 0:
                self.cart_repo.remove_line(cart, line)
                if not cart.lines:
                    self.cart_repo.delete(cart)
                    log.debug("cart of user %s emptied and deleted", user_id)
                    return None
            else:
                line.quantity = quantity
                if special_instructions is not None:
                    line.special_instructions = special_instructions
            cart.recalculate_total()
            self.db.flush()
        return cart

    def remove_item(self, user_id: int, menu_item_id: int) -> Optional[Cart]:
        return self.update_item(user_id, menu_item_id, 0)

    def clear(self, user_id: int) -> None:
        require_id(user_id, "user_id")
        with user_lock(user_id), transaction(self.db):
            cart = self.cart_repo.get_by_user(user_id)
            if cart:
                self.cart_repo.delete(cart)
