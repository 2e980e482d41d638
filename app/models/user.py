from typing import Optional
from datetime import datetime, timezone
from sqlmodel import Field, SQLModel

class UserBase(SQLModel):
    username: str = Field(unique=True, index=True)
    email: str = Field(unique=True, index=True)
    name: str

    # Address (used to prefill checkout)
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zipcode: Optional[str] = None

class User(UserBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    password_hash: str

    # Account Status
    is_superuser: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

class UserPublic(UserBase):
    """User as returned by the API, without the password hash."""
    id: int
    is_superuser: bool = False
    created_at: Optional[datetime] = None
