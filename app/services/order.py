import logging
from typing import List, Optional
from sqlmodel import Session
from pydantic import BaseModel

from app.core.exceptions import EmptyCartError, NotFoundError
from app.db.storage import Storage
from app.models.order import Order, OrderItem, OrderStatus, OrderWithItems
from app.services.cart import CartService
from app.services.shipping import ShippingService

logger = logging.getLogger(__name__)

class CheckoutData(BaseModel):
    shipping_address: str
    shipping_city: str
    shipping_state: str
    shipping_zipcode: str
    shipping_method: str
    payment_method: str

class OrderService:
    def __init__(self, session: Session):
        self.storage = Storage(session)
        self.cart_service = CartService(session)
        self.shipping_service = ShippingService(session)

    def get_order(self, order_id: int) -> Order:
        order = self.storage.get_order(order_id)
        if not order:
            raise NotFoundError("Order", order_id)
        return order

    def get_order_with_items(self, order_id: int) -> OrderWithItems:
        order = self.get_order(order_id)
        return OrderWithItems.model_validate(
            {**order.model_dump(), "items": [item.model_dump() for item in self.storage.get_order_items(order_id)]}
        )

    def get_user_orders(self, user_id: int) -> List[Order]:
        return self.storage.get_user_orders(user_id)

    def update_status(self, order_id: int, status: OrderStatus) -> Order:
        order = self.storage.update_order_status(order_id, status)
        if not order:
            raise NotFoundError("Order", order_id)
        self.storage.commit()
        return self.storage.refresh(order)

    def create_order_from_cart(self, cart_id: int, user_id: Optional[int], data: CheckoutData) -> Order:
        """Snapshot the cart into an order and delete the cart.

        Amounts are recomputed here from the cart rows and the shipping rule;
        the order, its items and the cart deletion commit together.
        """
        self.cart_service.get_cart(cart_id)
        cart_items = self.storage.get_cart_items(cart_id)
        if not cart_items:
            raise EmptyCartError(cart_id)

        subtotal = round(sum(item.price * item.quantity for item in cart_items), 2)
        shipping_cost = self.shipping_service.shipping_cost(data.shipping_method, subtotal)

        order = self.storage.create_order(Order(
            user_id=user_id,
            status=OrderStatus.PENDING,
            shipping_cost=shipping_cost,
            subtotal=subtotal,
            total=round(subtotal + shipping_cost, 2),
            **data.model_dump(),
        ))

        for cart_item in cart_items:
            self.storage.add_order_item(OrderItem(
                order_id=order.id,
                product_id=cart_item.product_id,
                product_name=cart_item.product.name,
                quantity=cart_item.quantity,
                price=cart_item.price,
            ))

        self.storage.delete_cart(cart_id)
        self.storage.commit()
        logger.info(f"Order {order.id} created from cart {cart_id} ({len(cart_items)} items, total {order.total})")
        return self.storage.refresh(order)
