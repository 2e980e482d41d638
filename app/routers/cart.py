from typing import Optional
from fastapi import APIRouter, Depends, Request, Response, status
from sqlmodel import Session
from pydantic import BaseModel
from app.core.exceptions import NotFoundError
from app.db.session import get_session
from app.models.cart import Cart, CartItem, CartWithItems
from app.models.user import User
from app.routers.auth import get_current_user_optional
from app.services.cart import CartService

router = APIRouter()

class CartItemCreate(BaseModel):
    product_id: int
    quantity: int = 1

class CartItemUpdate(BaseModel):
    quantity: int

def get_cart_service(session: Session = Depends(get_session)) -> CartService:
    return CartService(session)

def get_current_cart(
    request: Request,
    current_user: Optional[User] = Depends(get_current_user_optional),
    service: CartService = Depends(get_cart_service),
) -> Cart:
    """The caller's cart, created on first use.

    Anonymous visitors keep their cart id in the session cookie.
    """
    user_id = current_user.id if current_user else None
    cart = service.get_or_create_cart(user_id, request.session.get("cart_id"))
    if user_id is None:
        request.session["cart_id"] = cart.id
    return cart

@router.get("", response_model=CartWithItems)
def get_cart(cart: Cart = Depends(get_current_cart), service: CartService = Depends(get_cart_service)):
    """Get the current cart with its items and total"""
    return service.get_cart_with_items(cart)

@router.post("/items", response_model=CartItem, status_code=status.HTTP_201_CREATED)
def add_to_cart(
    cart_item: CartItemCreate,
    cart: Cart = Depends(get_current_cart),
    service: CartService = Depends(get_cart_service),
):
    """Add item to cart"""
    return service.add_item(cart.id, cart_item.product_id, cart_item.quantity)

@router.put("/items/{item_id}", response_model=CartItem)
def update_cart_item(
    item_id: int,
    cart_update: CartItemUpdate,
    cart: Cart = Depends(get_current_cart),
    service: CartService = Depends(get_cart_service),
):
    """Update cart item quantity"""
    return service.update_item_quantity(cart.id, item_id, cart_update.quantity)

@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_from_cart(
    item_id: int,
    cart: Cart = Depends(get_current_cart),
    service: CartService = Depends(get_cart_service),
):
    """Remove item from cart"""
    service.remove_item(cart.id, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_cart(
    request: Request,
    cart_id: int,
    current_user: Optional[User] = Depends(get_current_user_optional),
    service: CartService = Depends(get_cart_service),
):
    """Delete the cart and all of its items"""
    cart = service.get_cart(cart_id)
    # Only the owner (user or anonymous session) may clear a cart
    owner = current_user.id if current_user else None
    if cart.user_id != owner or (owner is None and request.session.get("cart_id") != cart_id):
        raise NotFoundError("Cart", cart_id)

    service.clear_cart(cart_id)
    if request.session.get("cart_id") == cart_id:
        request.session.pop("cart_id")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
