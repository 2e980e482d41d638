import logging
from fastapi import APIRouter, Depends, HTTPException, Request, status
from typing import Optional
from sqlmodel import Session
from pydantic import BaseModel, Field
from app.core.exceptions import AuthenticationError, PermissionDeniedError
from app.db.session import get_session
from app.models.user import User, UserPublic
from app.services.auth import AuthService
from app.services.cart import CartService
from app.services.user import UserService

logger = logging.getLogger(__name__)

router = APIRouter()

class UserCreate(BaseModel):
    username: str = Field(min_length=3)
    password: str = Field(min_length=6)
    email: str = Field(min_length=3)
    name: str = Field(min_length=1)
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zipcode: Optional[str] = None

class LoginRequest(BaseModel):
    username: str
    password: str

class ProfileUpdate(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zipcode: Optional[str] = None

def get_auth_service(session: Session = Depends(get_session)) -> AuthService:
    return AuthService(session)

def get_user_service(session: Session = Depends(get_session)) -> UserService:
    return UserService(session)

def get_current_user_optional(request: Request, session: Session = Depends(get_session)) -> Optional[User]:
    user_id = request.session.get("user_id")
    if not user_id:
        return None
    user = session.get(User, user_id)
    if user is None:
        # Stale session pointing at a removed account
        request.session.pop("user_id", None)
    return user

def get_current_user(user: Optional[User] = Depends(get_current_user_optional)) -> User:
    if user is None:
        raise AuthenticationError()
    return user

def get_current_superuser(user: User = Depends(get_current_user)) -> User:
    if not user.is_superuser:
        raise PermissionDeniedError()
    return user

def login_session(request: Request, user: User, session: Session):
    """Store the user in the session cookie and hand them any anonymous cart."""
    CartService(session).adopt_cart(request.session.pop("cart_id", None), user.id)
    request.session["user_id"] = user.id

@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def register(
    request: Request,
    user_in: UserCreate,
    service: AuthService = Depends(get_auth_service),
    session: Session = Depends(get_session),
):
    user = service.register_user(**user_in.model_dump())
    login_session(request, user, session)
    logger.info(f"Registered user {user.id} ({user.username})")
    return user

@router.post("/login", response_model=UserPublic)
def login(
    request: Request,
    credentials: LoginRequest,
    service: AuthService = Depends(get_auth_service),
    session: Session = Depends(get_session),
):
    user = service.authenticate_user(credentials.username, credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )
    login_session(request, user, session)
    return user

@router.post("/logout")
def logout(request: Request):
    request.session.clear()
    return {"message": "Logged out"}

@router.get("/user", response_model=UserPublic)
def read_user_me(current_user: User = Depends(get_current_user)):
    return current_user

@router.patch("/user", response_model=UserPublic)
def update_user_me(
    user_in: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return service.update_profile(current_user.id, user_in.model_dump(exclude_unset=True))
