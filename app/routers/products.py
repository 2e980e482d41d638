from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from app.db.session import get_session
from app.models.product import ProductCreate, ProductPublic, ProductUpdate
from app.models.user import User
from app.routers.auth import get_current_superuser
from app.services.product import ProductService

router = APIRouter()

def get_product_service(session: Session = Depends(get_session)) -> ProductService:
    return ProductService(session)

@router.get("/products", response_model=List[ProductPublic])
def read_products(
    category: Optional[str] = None,
    search: Optional[str] = None,
    service: ProductService = Depends(get_product_service),
):
    return service.list_products(category=category, search=search)

@router.get("/products/{product_id}", response_model=ProductPublic)
def read_product(product_id: int, service: ProductService = Depends(get_product_service)):
    return service.get_product(product_id)

@router.post("/products", response_model=ProductPublic, status_code=status.HTTP_201_CREATED)
def create_product(
    product: ProductCreate,
    current_user: User = Depends(get_current_superuser),
    service: ProductService = Depends(get_product_service),
):
    return service.create_product(product)

@router.patch("/products/{product_id}", response_model=ProductPublic)
def update_product(
    product_id: int,
    product: ProductUpdate,
    current_user: User = Depends(get_current_superuser),
    service: ProductService = Depends(get_product_service),
):
    return service.update_product(product_id, product)

@router.get("/categories", response_model=List[str])
def read_categories(service: ProductService = Depends(get_product_service)):
    return service.get_categories()
