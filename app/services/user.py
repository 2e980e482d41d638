from typing import Any, Dict, Optional
from sqlmodel import Session
from app.core.exceptions import ValidationError
from app.db.storage import Storage
from app.models.user import User

class UserService:
    def __init__(self, session: Session):
        self.storage = Storage(session)

    def update_profile(self, user_id: int, data: Dict[str, Any]) -> Optional[User]:
        email = data.get("email")
        if email:
            existing = self.storage.get_user_by_email(email)
            if existing and existing.id != user_id:
                raise ValidationError("Email already registered")

        user = self.storage.update_user(user_id, data)
        if not user:
            return None
        self.storage.commit()
        return self.storage.refresh(user)
