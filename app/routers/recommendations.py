from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlmodel import Session
from app.db.session import get_session
from app.services.recommendation import Recommendation, RecommendationService

router = APIRouter()

def get_recommendation_service(session: Session = Depends(get_session)) -> RecommendationService:
    return RecommendationService(session)

@router.get("", response_model=List[Recommendation])
def read_recommendations(
    user_id: Optional[int] = None,
    product_id: Optional[int] = None,
    service: RecommendationService = Depends(get_recommendation_service),
):
    """Similar products for a product, personal picks for a user, popular otherwise"""
    if product_id:
        return service.for_product(product_id)
    if user_id:
        return service.for_user(user_id)
    return service.popular()
