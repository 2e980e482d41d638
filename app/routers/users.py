from typing import List
from fastapi import APIRouter, Depends
from sqlmodel import Session
from app.core.exceptions import PermissionDeniedError
from app.db.session import get_session
from app.models.order import OrderPublic
from app.models.user import User
from app.routers.auth import get_current_user
from app.services.order import OrderService

router = APIRouter()

def get_order_service(session: Session = Depends(get_session)) -> OrderService:
    return OrderService(session)

@router.get("/{user_id}/orders", response_model=List[OrderPublic])
def read_user_orders(
    user_id: int,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    """
    Order history of a user, newest first. Users only see their own orders.
    """
    if current_user.id != user_id and not current_user.is_superuser:
        raise PermissionDeniedError()
    return service.get_user_orders(user_id)
