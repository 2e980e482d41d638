from typing import List
from fastapi import APIRouter, Depends
from sqlmodel import Session
from pydantic import BaseModel, Field
from app.db.session import get_session
from app.models.shipping import ShippingOption
from app.services.shipping import ShippingCalculation, ShippingService

router = APIRouter()

class ShippingCalculationRequest(BaseModel):
    cart_id: int
    zipcode: str = Field(min_length=1)

def get_shipping_service(session: Session = Depends(get_session)) -> ShippingService:
    return ShippingService(session)

@router.get("/options", response_model=List[ShippingOption])
def read_shipping_options(service: ShippingService = Depends(get_shipping_service)):
    return service.get_all_options()

@router.post("/calculate", response_model=ShippingCalculation)
def calculate_shipping(
    data: ShippingCalculationRequest,
    service: ShippingService = Depends(get_shipping_service),
):
    return service.calculate(data.cart_id, data.zipcode)

@router.get("/options/{option_id}", response_model=ShippingOption)
def read_shipping_option(option_id: int, service: ShippingService = Depends(get_shipping_service)):
    return service.get_option(option_id)
