from typing import Optional
from sqlmodel import Session

from app.core.exceptions import ValidationError
from app.core.security import get_password_hash, verify_password
from app.db.storage import Storage
from app.models.user import User

class AuthService:
    def __init__(self, session: Session):
        self.storage = Storage(session)

    def register_user(
        self,
        username: str,
        password: str,
        email: str,
        name: str,
        address: Optional[str] = None,
        city: Optional[str] = None,
        state: Optional[str] = None,
        zipcode: Optional[str] = None,
    ) -> User:
        if self.storage.get_user_by_username(username):
            raise ValidationError("Username already exists")
        if self.storage.get_user_by_email(email):
            raise ValidationError("Email already registered")

        user = self.storage.create_user(User(
            username=username,
            email=email,
            name=name,
            password_hash=get_password_hash(password),
            address=address,
            city=city,
            state=state,
            zipcode=zipcode,
        ))
        self.storage.commit()
        return self.storage.refresh(user)

    def authenticate_user(self, username: str, password: str) -> Optional[User]:
        user = self.storage.get_user_by_username(username)
        if not user or not verify_password(password, user.password_hash):
            return None
        return user
