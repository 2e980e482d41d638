"""Product recommendations.

Plain heuristics over the catalog, no model behind them:

* for a user, the categories they bought from most, backfilled with the
  best product of each category they have not explored yet;
* for a product, the best rated products of the same category;
* otherwise, the best rated products overall.

Every recommendation carries a `reason_code` / `reason_text` pair so the
client can explain why it is shown.
"""

import logging
from collections import Counter
from typing import Iterable, List
from sqlmodel import Session

from app.core.config import settings
from app.db.storage import Storage
from app.models.product import Product, ProductPublic

logger = logging.getLogger(__name__)

# How many products a single category may contribute
PER_PREFERRED_CATEGORY = 3
PER_UNEXPLORED_CATEGORY = 1

class Recommendation(ProductPublic):
    reason_code: str
    reason_text: str

def by_rating(products: Iterable[Product]) -> List[Product]:
    # sorted() is stable, ties keep catalog order
    return sorted(products, key=lambda product: product.rating or 0.0, reverse=True)

def recommend(product: Product, reason_code: str, reason_text: str) -> Recommendation:
    return Recommendation(
        **ProductPublic.model_validate(product).model_dump(),
        reason_code=reason_code,
        reason_text=reason_text,
    )

class RecommendationService:
    def __init__(self, session: Session):
        self.storage = Storage(session)

    def popular(self) -> List[Recommendation]:
        """Best rated products overall."""
        products = by_rating(self.storage.get_all_products())[:settings.RECOMMENDATION_LIMIT]
        return [recommend(p, "popular", "Highly rated products") for p in products]

    def for_user(self, user_id: int) -> List[Recommendation]:
        try:
            return self._for_user(user_id)
        except Exception:
            logger.exception(f"Error generating recommendations for user {user_id}, falling back to popular")
            return self.popular()

    def for_product(self, product_id: int) -> List[Recommendation]:
        try:
            return self._for_product(product_id)
        except Exception:
            logger.exception(f"Error generating recommendations for product {product_id}, falling back to popular")
            return self.popular()

    def _purchased_product_ids(self, user_id: int) -> List[int]:
        """One entry per order item, so repeat purchases weigh more."""
        purchased = []
        for order in self.storage.get_user_orders(user_id):
            for item in self.storage.get_order_items(order.id):
                if item.product_id is not None:
                    purchased.append(item.product_id)
        return purchased

    def _for_user(self, user_id: int) -> List[Recommendation]:
        limit = settings.RECOMMENDATION_LIMIT
        purchases = self._purchased_product_ids(user_id)
        if not purchases:
            return self.popular()
        purchased_ids = set(purchases)

        # Category frequency over purchased products that still exist
        frequency = Counter()
        for product_id in purchases:
            product = self.storage.get_product(product_id)
            if product:
                frequency[product.category] += 1
        preferred_categories = [category for category, _ in frequency.most_common()]

        all_products = self.storage.get_all_products()
        candidates = [p for p in all_products if p.id not in purchased_ids]

        recommendations: List[Recommendation] = []
        for category in preferred_categories:
            in_category = by_rating(p for p in candidates if p.category == category)
            recommendations.extend(
                recommend(p, "category", f"Because you bought products from {category}")
                for p in in_category[:PER_PREFERRED_CATEGORY]
            )

        if len(recommendations) < limit:
            unexplored = []
            for product in all_products:
                if product.category not in frequency and product.category not in unexplored:
                    unexplored.append(product.category)

            for category in unexplored:
                if len(recommendations) >= limit:
                    break
                in_category = by_rating(p for p in candidates if p.category == category)
                recommendations.extend(
                    recommend(p, "explore", f"Discover products from {category}")
                    for p in in_category[:PER_UNEXPLORED_CATEGORY]
                )

        return recommendations[:limit]

    def _for_product(self, product_id: int) -> List[Recommendation]:
        product = self.storage.get_product(product_id)
        if not product:
            return self.popular()

        similar = by_rating(
            p for p in self.storage.get_products_by_category(product.category) if p.id != product_id
        )
        return [
            recommend(p, "similar", f"Similar to {product.name}")
            for p in similar[:settings.SIMILAR_PRODUCTS_LIMIT]
        ]
