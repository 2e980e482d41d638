"""CRUD accessors over the storefront tables.

Mutating methods add and flush so that generated ids are available, but they
never commit: the service that owns an operation calls `commit()` once, so a
multi-step operation like checkout lands in a single transaction.
"""

from typing import Any, Dict, List, Optional
from sqlmodel import Session, select, or_, col

from app.models.user import User
from app.models.product import Product
from app.models.cart import Cart, CartItem
from app.models.order import Order, OrderItem, OrderStatus
from app.models.shipping import ShippingOption
from app.models.payment import PaymentMethod


class Storage:
    def __init__(self, session: Session):
        self.session = session

    def commit(self):
        self.session.commit()

    def refresh(self, obj):
        self.session.refresh(obj)
        return obj

    def _save(self, obj):
        self.session.add(obj)
        self.session.flush()
        self.session.refresh(obj)
        return obj

    # Users
    def get_user(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.username == username)).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        # Case-insensitive, emails are compared the way users type them
        return self.session.exec(select(User).where(col(User.email).ilike(email))).first()

    def create_user(self, user: User) -> User:
        return self._save(user)

    def update_user(self, user_id: int, data: Dict[str, Any]) -> Optional[User]:
        user = self.get_user(user_id)
        if not user:
            return None
        for key, value in data.items():
            setattr(user, key, value)
        return self._save(user)

    # Products
    def get_product(self, product_id: int) -> Optional[Product]:
        return self.session.get(Product, product_id)

    def get_all_products(self) -> List[Product]:
        return list(self.session.exec(select(Product).order_by(Product.id)).all())

    def get_products_by_category(self, category: str) -> List[Product]:
        return list(self.session.exec(
            select(Product).where(Product.category == category).order_by(Product.id)
        ).all())

    def search_products(self, query: str) -> List[Product]:
        pattern = f"%{query}%"
        return list(self.session.exec(
            select(Product).where(
                or_(
                    col(Product.name).ilike(pattern),
                    col(Product.description).ilike(pattern),
                )
            ).order_by(Product.id)
        ).all())

    def create_product(self, product: Product) -> Product:
        return self._save(product)

    def update_product(self, product_id: int, data: Dict[str, Any]) -> Optional[Product]:
        product = self.get_product(product_id)
        if not product:
            return None
        for key, value in data.items():
            setattr(product, key, value)
        return self._save(product)

    # Carts
    def get_cart(self, cart_id: int) -> Optional[Cart]:
        return self.session.get(Cart, cart_id)

    def get_cart_by_user_id(self, user_id: int) -> Optional[Cart]:
        return self.session.exec(
            select(Cart).where(Cart.user_id == user_id).order_by(Cart.id)
        ).first()

    def create_cart(self, cart: Cart) -> Cart:
        return self._save(cart)

    def delete_cart(self, cart_id: int) -> bool:
        cart = self.get_cart(cart_id)
        if not cart:
            return False
        # Items go with it (cascade="all, delete-orphan"); reload them first
        # so rows flushed after the collection was loaded are not missed
        self.session.expire(cart, ["items"])
        self.session.delete(cart)
        self.session.flush()
        return True

    # Cart items
    def get_cart_items(self, cart_id: int) -> List[CartItem]:
        return list(self.session.exec(
            select(CartItem).where(CartItem.cart_id == cart_id).order_by(CartItem.id)
        ).all())

    def get_cart_item(self, item_id: int) -> Optional[CartItem]:
        return self.session.get(CartItem, item_id)

    def add_cart_item(self, item: CartItem) -> CartItem:
        """Insert a cart row, or bump the quantity of the row for the same product."""
        existing_item = self.session.exec(
            select(CartItem).where(
                CartItem.cart_id == item.cart_id,
                CartItem.product_id == item.product_id,
            )
        ).first()

        if existing_item:
            existing_item.quantity += item.quantity
            return self._save(existing_item)

        return self._save(item)

    def update_cart_item_quantity(self, item_id: int, quantity: int) -> Optional[CartItem]:
        item = self.get_cart_item(item_id)
        if not item:
            return None
        item.quantity = quantity
        return self._save(item)

    def remove_cart_item(self, item_id: int) -> bool:
        item = self.get_cart_item(item_id)
        if not item:
            return False
        self.session.delete(item)
        self.session.flush()
        return True

    # Orders
    def get_order(self, order_id: int) -> Optional[Order]:
        return self.session.get(Order, order_id)

    def get_user_orders(self, user_id: int) -> List[Order]:
        return list(self.session.exec(
            select(Order)
            .where(Order.user_id == user_id)
            .order_by(col(Order.created_at).desc(), col(Order.id).desc())
        ).all())

    def create_order(self, order: Order) -> Order:
        return self._save(order)

    def update_order_status(self, order_id: int, status: OrderStatus) -> Optional[Order]:
        order = self.get_order(order_id)
        if not order:
            return None
        order.status = status
        return self._save(order)

    # Order items
    def get_order_items(self, order_id: int) -> List[OrderItem]:
        return list(self.session.exec(
            select(OrderItem).where(OrderItem.order_id == order_id).order_by(OrderItem.id)
        ).all())

    def add_order_item(self, item: OrderItem) -> OrderItem:
        return self._save(item)

    # Shipping options
    def get_all_shipping_options(self) -> List[ShippingOption]:
        return list(self.session.exec(select(ShippingOption).order_by(ShippingOption.id)).all())

    def get_shipping_option(self, option_id: int) -> Optional[ShippingOption]:
        return self.session.get(ShippingOption, option_id)

    def get_shipping_option_by_code(self, code: str) -> Optional[ShippingOption]:
        return self.session.exec(select(ShippingOption).where(ShippingOption.code == code)).first()

    def create_shipping_option(self, option: ShippingOption) -> ShippingOption:
        return self._save(option)

    # Payment methods
    def get_all_payment_methods(self) -> List[PaymentMethod]:
        return list(self.session.exec(
            select(PaymentMethod).where(PaymentMethod.is_active == True).order_by(PaymentMethod.id)  # noqa: E712
        ).all())

    def get_payment_method(self, method_id: int) -> Optional[PaymentMethod]:
        return self.session.get(PaymentMethod, method_id)

    def get_payment_method_by_code(self, code: str) -> Optional[PaymentMethod]:
        return self.session.exec(select(PaymentMethod).where(PaymentMethod.code == code)).first()

    def create_payment_method(self, method: PaymentMethod) -> PaymentMethod:
        return self._save(method)
