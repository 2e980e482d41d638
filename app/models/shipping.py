from typing import Optional
from sqlmodel import Field, SQLModel

class ShippingOption(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    # "standard", "express", "pickup"
    code: str = Field(unique=True, index=True)
    name: str
    description: str
    price: float
    estimated_days: str
