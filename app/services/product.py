from typing import List, Optional
from sqlmodel import Session

from app.core.exceptions import NotFoundError
from app.db.storage import Storage
from app.models.product import Product, ProductCreate, ProductUpdate

class ProductService:
    def __init__(self, session: Session):
        self.storage = Storage(session)

    def get_product(self, product_id: int) -> Product:
        product = self.storage.get_product(product_id)
        if not product:
            raise NotFoundError("Product", product_id)
        return product

    def list_products(self, category: Optional[str] = None, search: Optional[str] = None) -> List[Product]:
        # Category filter takes precedence over search
        if category:
            return self.storage.get_products_by_category(category)
        if search:
            return self.storage.search_products(search)
        return self.storage.get_all_products()

    def get_categories(self) -> List[str]:
        """Unique categories, in the order they first appear in the catalog."""
        categories = {}
        for product in self.storage.get_all_products():
            categories.setdefault(product.category, None)
        return list(categories)

    def create_product(self, data: ProductCreate) -> Product:
        product = self.storage.create_product(Product.model_validate(data))
        self.storage.commit()
        return self.storage.refresh(product)

    def update_product(self, product_id: int, data: ProductUpdate) -> Product:
        product = self.storage.update_product(product_id, data.model_dump(exclude_unset=True))
        if not product:
            raise NotFoundError("Product", product_id)
        self.storage.commit()
        return self.storage.refresh(product)
