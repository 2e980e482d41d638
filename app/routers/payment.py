from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends
from sqlmodel import Session
from pydantic import BaseModel, Field
from app.db.session import get_session
from app.models.payment import PaymentMethod, PaymentResult
from app.services.payment import PaymentService

router = APIRouter()

class PaymentRequest(BaseModel):
    order_id: int
    payment_method: str = Field(min_length=1)
    payment_details: Optional[Dict[str, Any]] = None

def get_payment_service(session: Session = Depends(get_session)) -> PaymentService:
    return PaymentService(session)

@router.get("/methods", response_model=List[PaymentMethod])
def read_payment_methods(service: PaymentService = Depends(get_payment_service)):
    return service.get_all_methods()

@router.post("/process", response_model=PaymentResult)
def process_payment(
    data: PaymentRequest,
    service: PaymentService = Depends(get_payment_service),
):
    """Simulate payment for an order; marks it paid on success"""
    return service.process_payment(data.order_id, data.payment_method, data.payment_details)

@router.get("/methods/{method_id}", response_model=PaymentMethod)
def read_payment_method(method_id: int, service: PaymentService = Depends(get_payment_service)):
    return service.get_method(method_id)
