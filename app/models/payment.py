from typing import Any, Dict, Optional
from sqlmodel import Field, SQLModel
from pydantic import BaseModel

class PaymentMethod(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str

    # "credit", "boleto", "pix"
    code: str = Field(unique=True, index=True)
    is_active: bool = Field(default=True)

class PaymentResult(BaseModel):
    success: bool
    transaction_id: Optional[str] = None
    message: str
    details: Optional[Dict[str, Any]] = None
