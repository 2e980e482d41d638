# Import all models to register them with SQLModel
from app.models.user import User, UserPublic
from app.models.product import Product, ProductPublic, ProductCreate, ProductUpdate
from app.models.cart import Cart, CartItem, CartItemWithProduct, CartRead, CartWithItems
from app.models.order import Order, OrderItem, OrderStatus, OrderPublic, OrderItemPublic, OrderWithItems
from app.models.shipping import ShippingOption
from app.models.payment import PaymentMethod, PaymentResult

__all__ = [
    "User",
    "UserPublic",
    "Product",
    "ProductPublic",
    "ProductCreate",
    "ProductUpdate",
    "Cart",
    "CartItem",
    "CartItemWithProduct",
    "CartRead",
    "CartWithItems",
    "Order",
    "OrderItem",
    "OrderStatus",
    "OrderPublic",
    "OrderItemPublic",
    "OrderWithItems",
    "ShippingOption",
    "PaymentMethod",
    "PaymentResult",
]
