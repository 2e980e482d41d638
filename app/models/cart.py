from typing import List, Optional
from datetime import datetime, timezone
from sqlmodel import Field, Relationship, SQLModel

from app.models.product import Product, ProductPublic

class Cart(SQLModel, table=True):
    # Deleted ids must not come back: stale session cookies still carry them
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)

    # Null for anonymous (session) carts
    user_id: Optional[int] = Field(default=None, foreign_key="user.id", index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Relationships
    items: List["CartItem"] = Relationship(
        back_populates="cart",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )

class CartItem(SQLModel, table=True):
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)

    # References
    cart_id: int = Field(foreign_key="cart.id", index=True)
    product_id: int = Field(foreign_key="product.id")

    # Cart Details
    quantity: int = Field(default=1, ge=1)
    price: float  # unit price copied from the product when the row was created

    cart: Optional[Cart] = Relationship(back_populates="items")
    product: Optional[Product] = Relationship()

class CartItemWithProduct(SQLModel):
    id: int
    cart_id: int
    product_id: int
    quantity: int
    price: float
    product: ProductPublic

class CartRead(SQLModel):
    id: int
    user_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

class CartWithItems(SQLModel):
    cart: CartRead
    items: List[CartItemWithProduct]
    total: float
