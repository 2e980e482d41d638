import logging
from datetime import datetime, timezone
from typing import List, Optional
from sqlmodel import Session

from app.core.exceptions import NotFoundError, ValidationError
from app.db.storage import Storage
from app.models.cart import Cart, CartItem, CartItemWithProduct, CartRead, CartWithItems

logger = logging.getLogger(__name__)

class CartService:
    def __init__(self, session: Session):
        self.storage = Storage(session)

    def get_cart(self, cart_id: int) -> Cart:
        cart = self.storage.get_cart(cart_id)
        if not cart:
            raise NotFoundError("Cart", cart_id)
        return cart

    def get_or_create_cart(self, user_id: Optional[int], cart_id: Optional[int] = None) -> Cart:
        """Return the user's cart, the anonymous session cart, or a brand new one.

        A logged-in user is looked up by user id. Anonymous sessions pass the
        cart id they remembered; it is only reused while it is still an
        anonymous cart.
        """
        cart = None
        if user_id:
            cart = self.storage.get_cart_by_user_id(user_id)
        elif cart_id:
            cart = self.storage.get_cart(cart_id)
            if cart and cart.user_id is not None:
                cart = None

        if not cart:
            cart = self.storage.create_cart(Cart(user_id=user_id))
            self.storage.commit()
            self.storage.refresh(cart)
            logger.info(f"Created cart {cart.id} for user {user_id or 'guest'}")

        return cart

    def adopt_cart(self, cart_id: Optional[int], user_id: int) -> Optional[Cart]:
        """Hand an anonymous cart over to a user who just logged in.

        Only happens when the user has no cart of their own yet.
        """
        if not cart_id:
            return None
        cart = self.storage.get_cart(cart_id)
        if not cart or cart.user_id is not None:
            return None
        if self.storage.get_cart_by_user_id(user_id):
            return None

        cart.user_id = user_id
        cart.updated_at = datetime.now(timezone.utc)
        self.storage.session.add(cart)
        self.storage.commit()
        logger.info(f"Cart {cart.id} adopted by user {user_id}")
        return self.storage.refresh(cart)

    def get_cart_items(self, cart_id: int) -> List[CartItemWithProduct]:
        return [CartItemWithProduct.model_validate(item) for item in self.storage.get_cart_items(cart_id)]

    def calculate_total(self, cart_id: int) -> float:
        items = self.storage.get_cart_items(cart_id)
        return round(sum(item.price * item.quantity for item in items), 2)

    def get_cart_with_items(self, cart: Cart) -> CartWithItems:
        return CartWithItems(
            cart=CartRead.model_validate(cart),
            items=self.get_cart_items(cart.id),
            total=self.calculate_total(cart.id),
        )

    def add_item(self, cart_id: int, product_id: int, quantity: int = 1) -> CartItem:
        """Add a product to the cart at its current price.

        Adding a product that is already in the cart increments the quantity
        of the existing row.
        """
        if quantity < 1:
            raise ValidationError("Invalid quantity", details={"quantity": quantity})

        product = self.storage.get_product(product_id)
        if not product:
            raise NotFoundError("Product", product_id)

        item = self.storage.add_cart_item(
            CartItem(cart_id=cart_id, product_id=product_id, quantity=quantity, price=product.price)
        )
        self._touch(cart_id)
        self.storage.commit()
        logger.info(f"Added item to cart {cart_id}: product {product_id}, quantity {quantity}")
        return self.storage.refresh(item)

    def update_item_quantity(self, cart_id: int, item_id: int, quantity: int) -> CartItem:
        if quantity < 1:
            raise ValidationError("Invalid quantity", details={"quantity": quantity})

        self._get_own_item(cart_id, item_id)
        item = self.storage.update_cart_item_quantity(item_id, quantity)
        self._touch(cart_id)
        self.storage.commit()
        return self.storage.refresh(item)

    def remove_item(self, cart_id: int, item_id: int) -> None:
        self._get_own_item(cart_id, item_id)
        self.storage.remove_cart_item(item_id)
        self._touch(cart_id)
        self.storage.commit()

    def clear_cart(self, cart_id: int) -> None:
        """Delete the cart together with all of its items."""
        if not self.storage.delete_cart(cart_id):
            raise NotFoundError("Cart", cart_id)
        self.storage.commit()

    def _get_own_item(self, cart_id: int, item_id: int) -> CartItem:
        item = self.storage.get_cart_item(item_id)
        if not item or item.cart_id != cart_id:
            raise NotFoundError("Cart item", item_id)
        return item

    def _touch(self, cart_id: int):
        cart = self.storage.get_cart(cart_id)
        if cart:
            cart.updated_at = datetime.now(timezone.utc)
            self.storage.session.add(cart)
