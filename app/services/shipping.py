from typing import List, Optional
from sqlmodel import Session
from pydantic import BaseModel

from app.core.config import settings
from app.core.exceptions import NotFoundError, ValidationError
from app.db.storage import Storage
from app.models.shipping import ShippingOption
from app.services.cart import CartService

STANDARD = "standard"
EXPRESS = "express"

class ShippingOptionRead(BaseModel):
    id: int
    code: str
    name: str
    description: str
    price: float
    estimated_days: str

class ShippingCalculation(BaseModel):
    options: List[ShippingOptionRead]
    best_option: Optional[ShippingOptionRead] = None

def qualifies_for_free_shipping(subtotal: float) -> bool:
    return subtotal > settings.FREE_SHIPPING_THRESHOLD

class ShippingService:
    def __init__(self, session: Session):
        self.storage = Storage(session)
        self.cart_service = CartService(session)

    def get_all_options(self) -> List[ShippingOption]:
        return self.storage.get_all_shipping_options()

    def get_option(self, option_id: int) -> ShippingOption:
        option = self.storage.get_shipping_option(option_id)
        if not option:
            raise NotFoundError("Shipping option", option_id)
        return option

    def best_option(self, subtotal: float) -> Optional[ShippingOptionRead]:
        """Free express delivery above the threshold, standard delivery otherwise."""
        if qualifies_for_free_shipping(subtotal):
            express = self.storage.get_shipping_option_by_code(EXPRESS)
            if not express:
                return None
            free = ShippingOptionRead.model_validate(express, from_attributes=True)
            return free.model_copy(update={"price": 0.0, "name": f"{express.name} (Free)"})

        standard = self.storage.get_shipping_option_by_code(STANDARD)
        return ShippingOptionRead.model_validate(standard, from_attributes=True) if standard else None

    def calculate(self, cart_id: int, zipcode: str) -> ShippingCalculation:
        # zipcode is required by the API but does not change the price
        self.cart_service.get_cart(cart_id)
        subtotal = self.cart_service.calculate_total(cart_id)
        options = [
            ShippingOptionRead.model_validate(option, from_attributes=True)
            for option in self.storage.get_all_shipping_options()
        ]
        return ShippingCalculation(options=options, best_option=self.best_option(subtotal))

    def shipping_cost(self, code: str, subtotal: float) -> float:
        """Price of the chosen option for a cart with this subtotal."""
        option = self.storage.get_shipping_option_by_code(code)
        if not option:
            raise ValidationError("Unknown shipping method", details={"shipping_method": code})
        if option.code == EXPRESS and qualifies_for_free_shipping(subtotal):
            return 0.0
        return option.price
