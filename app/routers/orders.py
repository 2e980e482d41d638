from typing import List, Optional
from fastapi import APIRouter, Depends, Request, status
from sqlmodel import Session
from pydantic import Field
from app.core.exceptions import AuthenticationError, PermissionDeniedError
from app.db.session import get_session
from app.models.order import OrderPublic, OrderStatus, OrderWithItems
from app.models.user import User
from app.routers.auth import get_current_superuser, get_current_user, get_current_user_optional
from app.services.order import CheckoutData, OrderService

router = APIRouter()

class OrderCreate(CheckoutData):
    cart_id: int
    shipping_address: str = Field(min_length=1)
    shipping_city: str = Field(min_length=1)
    shipping_state: str = Field(min_length=1)
    shipping_zipcode: str = Field(min_length=1)
    shipping_method: str = Field(min_length=1)
    payment_method: str = Field(min_length=1)

def get_order_service(session: Session = Depends(get_session)) -> OrderService:
    return OrderService(session)

@router.post("", response_model=OrderPublic, status_code=status.HTTP_201_CREATED)
def create_order(
    request: Request,
    order_in: OrderCreate,
    current_user: Optional[User] = Depends(get_current_user_optional),
    service: OrderService = Depends(get_order_service),
):
    cart = service.cart_service.get_cart(order_in.cart_id)
    user_id = current_user.id if current_user else None
    if cart.user_id != user_id or (user_id is None and request.session.get("cart_id") != cart.id):
        raise PermissionDeniedError()

    order = service.create_order_from_cart(
        order_in.cart_id,
        user_id,
        CheckoutData(**order_in.model_dump(exclude={"cart_id"})),
    )
    if request.session.get("cart_id") == order_in.cart_id:
        request.session.pop("cart_id")
    return order

@router.get("", response_model=List[OrderPublic])
def list_orders(
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    return service.get_user_orders(current_user.id)

@router.get("/{order_id}", response_model=OrderWithItems)
def get_order(
    order_id: int,
    current_user: Optional[User] = Depends(get_current_user_optional),
    service: OrderService = Depends(get_order_service),
):
    order = service.get_order_with_items(order_id)

    # Guest orders stay reachable by id; user orders only by their owner
    if order.user_id is not None:
        if current_user is None:
            raise AuthenticationError()
        if order.user_id != current_user.id and not current_user.is_superuser:
            raise PermissionDeniedError()
    return order

@router.patch("/{order_id}/status", response_model=OrderPublic)
def update_order_status(
    order_id: int,
    status: OrderStatus,
    current_user: User = Depends(get_current_superuser),
    service: OrderService = Depends(get_order_service),
):
    return service.update_status(order_id, status)
