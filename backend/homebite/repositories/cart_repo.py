from typing import List, Optional

from sqlalchemy.orm import Session

from homebite.models.cart import Cart
from homebite.models.cart_line import CartLine


class CartRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_user(self, user_id: int) -> Optional[Cart]:
        return self.db.query(Cart).filter(Cart.user_id == user_id).first()

    def list_holding_item(self, menu_item_id: int) -> List[Cart]:
        return (
            self.db.query(Cart)
            .join(CartLine, CartLine.cart_id == Cart.id)
            .filter(CartLine.menu_item_id == menu_item_id)
            .all()
        )

    def create(self, user_id: int, cook_profile_id: int) -> Cart:
        c = Cart(user_id=user_id, cook_profile_id=cook_profile_id, total_cents=0)
        self.db.add(c)
        self.db.flush()
        return c

    def add_line(
        self,
        cart: Cart,
        menu_item_id: int,
        quantity: int,
        unit_price_cents: int,
        special_instructions: Optional[str] = None,
    ) -> CartLine:
        line = CartLine(
            menu_item_id=menu_item_id,
            quantity=quantity,
            unit_price_cents=unit_price_cents,
            special_instructions=special_instructions,
        )
        cart.lines.append(line)
        self.db.flush()
        return line

    def remove_line(self, cart: Cart, line: CartLine):
        # delete-orphan cascade removes the row on flush
        cart.lines.remove(line)
        self.db.flush()

    def delete(self, cart: Cart):
        self.db.delete(cart)
        self.db.flush()
