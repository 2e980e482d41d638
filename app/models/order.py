from typing import List, Optional
from datetime import datetime, timezone
from sqlmodel import Field, Relationship, SQLModel
from enum import Enum

class OrderStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

class OrderItemBase(SQLModel):
    # Product may be gone later; name and price are a snapshot
    product_id: Optional[int] = Field(default=None, foreign_key="product.id")
    product_name: str
    quantity: int
    price: float

class OrderItem(OrderItemBase, table=True):
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="order.id", index=True)

    order: Optional["Order"] = Relationship(back_populates="items")

class OrderItemPublic(OrderItemBase):
    id: int
    order_id: int

class OrderBase(SQLModel):
    user_id: Optional[int] = Field(default=None, foreign_key="user.id", index=True)
    status: OrderStatus = Field(default=OrderStatus.PENDING)

    # Shipping
    shipping_address: str
    shipping_city: str
    shipping_state: str
    shipping_zipcode: str
    shipping_method: str
    shipping_cost: float

    # Payment
    payment_method: str

    # Amounts
    subtotal: float
    total: float

class Order(OrderBase, table=True):
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)

    # Timestamps
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Relationships
    items: List[OrderItem] = Relationship(
        back_populates="order",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )

class OrderPublic(OrderBase):
    id: int
    created_at: datetime

class OrderWithItems(OrderPublic):
    items: List[OrderItemPublic] = []
