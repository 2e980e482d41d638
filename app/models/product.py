from typing import Optional
from sqlmodel import Field, SQLModel

class ProductBase(SQLModel):
    # Basic Info
    name: str = Field(index=True)
    description: str
    image_url: str
    category: str = Field(index=True)

    # Pricing
    price: float = Field(ge=0)

    # Inventory
    stock: int = Field(default=0, ge=0)

    # 0.0 - 5.0, used to rank recommendations
    rating: float = Field(default=0.0, ge=0, le=5)

class Product(ProductBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

class ProductPublic(ProductBase):
    id: int

class ProductCreate(ProductBase):
    pass

class ProductUpdate(SQLModel):
    name: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    stock: Optional[int] = Field(default=None, ge=0)
    rating: Optional[float] = Field(default=None, ge=0, le=5)
