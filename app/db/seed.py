import logging
from sqlmodel import Session, select

from app.db.storage import Storage
from app.models.product import Product
from app.models.shipping import ShippingOption
from app.models.payment import PaymentMethod

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS = [
    dict(name="Premium Smartphone", description="Flagship smartphone with a high-resolution camera and a fast processor.",
         price=2499.99, image_url="/images/smartphone-premium.webp", category="Electronics", stock=15, rating=4.8),
    dict(name="Ultrathin Notebook", description="Light, thin notebook with excellent performance for work and entertainment.",
         price=4299.99, image_url="/images/notebook-ultrathin.webp", category="Electronics", stock=8, rating=4.5),
    dict(name="Bluetooth Headphones", description="Wireless headphones with noise cancelling for an immersive experience.",
         price=299.99, image_url="/images/headphones-bluetooth.webp", category="Electronics", stock=25, rating=4.2),
    dict(name="Basic T-Shirt", description="High quality 100% cotton t-shirt in several colours.",
         price=89.99, image_url="/images/tshirt-basic.webp", category="Clothing", stock=50, rating=4.0),
    dict(name="Running Shoes", description="Comfortable shoes for running and walking with cushioning technology.",
         price=329.99, image_url="/images/shoes-running.webp", category="Sports", stock=12, rating=4.7),
    dict(name="The Power of Habit", description="Best-seller about how habits work and how to change them.",
         price=49.99, image_url="/images/book-habit.webp", category="Books", stock=30, rating=4.9),
    dict(name="Non-stick Cookware Set", description="High quality cookware set with non-stick coating.",
         price=399.99, image_url="/images/cookware-set.webp", category="Home & Garden", stock=18, rating=4.3),
    dict(name="Smartwatch", description="Smartwatch with health tracking, GPS and water resistance.",
         price=999.99, image_url="/images/smartwatch.webp", category="Electronics", stock=10, rating=4.6),
    dict(name="Budget Smartphone", description="Basic smartphone with great value for everyday tasks.",
         price=899.99, image_url="/images/smartphone-budget.webp", category="Electronics", stock=25, rating=4.0),
    dict(name="Gaming Smartphone", description="Smartphone tuned for games with a fast processor and advanced cooling.",
         price=3299.99, image_url="/images/smartphone-gaming.webp", category="Electronics", stock=8, rating=4.7),
    dict(name="Student Notebook", description="Simple notebook for studying and basic tasks.",
         price=2599.99, image_url="/images/notebook-student.webp", category="Electronics", stock=12, rating=4.1),
    dict(name="Gaming Notebook", description="Powerful gaming notebook with a dedicated GPU and high refresh rate display.",
         price=5999.99, image_url="/images/notebook-gaming.webp", category="Electronics", stock=5, rating=4.9),
    dict(name="Sport Earphones", description="Water and sweat resistant earphones for workouts.",
         price=199.99, image_url="/images/earphones-sport.webp", category="Electronics", stock=30, rating=4.3),
    dict(name="Premium Headphones", description="Headphones with superior audio quality and an elegant design.",
         price=599.99, image_url="/images/headphones-premium.webp", category="Electronics", stock=10, rating=4.8),
    dict(name="Printed T-Shirt", description="T-shirt with modern prints and comfortable fabric.",
         price=109.99, image_url="/images/tshirt-printed.webp", category="Clothing", stock=35, rating=4.2),
    dict(name="Polo Shirt", description="Elegant polo shirt for casual and formal occasions.",
         price=129.99, image_url="/images/polo-shirt.webp", category="Clothing", stock=25, rating=4.5),
    dict(name="Casual Sneakers", description="Comfortable sneakers for daily use with a modern design.",
         price=259.99, image_url="/images/sneakers-casual.webp", category="Clothing", stock=18, rating=4.4),
    dict(name="Performance Running Shoes", description="Professional shoes for competitions and intense training.",
         price=499.99, image_url="/images/shoes-performance.webp", category="Sports", stock=8, rating=4.9),
]

SHIPPING_OPTIONS = [
    dict(code="standard", name="Standard Delivery", description="Delivery in 3-5 business days",
         price=19.90, estimated_days="3-5 days"),
    dict(code="express", name="Express Delivery", description="Delivery in 1-2 business days",
         price=39.90, estimated_days="1-2 days"),
    dict(code="pickup", name="Store Pickup", description="Pick up your order at one of our stores",
         price=0.00, estimated_days="1 day"),
]

PAYMENT_METHODS = [
    dict(code="credit", name="Credit Card", is_active=True),
    dict(code="boleto", name="Bank Slip (Boleto)", is_active=True),
    dict(code="pix", name="PIX", is_active=True),
]


def seed_catalog(session: Session) -> bool:
    """Insert sample products, shipping options and payment methods.

    Does nothing when products already exist. Returns True when data was added.
    """
    existing = session.exec(select(Product)).first()
    if existing:
        logger.info("Catalog already seeded, skipping")
        return False

    storage = Storage(session)
    for data in SAMPLE_PRODUCTS:
        storage.create_product(Product(**data))
    for data in SHIPPING_OPTIONS:
        storage.create_shipping_option(ShippingOption(**data))
    for data in PAYMENT_METHODS:
        storage.create_payment_method(PaymentMethod(**data))

    storage.commit()
    logger.info(
        f"Seeded {len(SAMPLE_PRODUCTS)} products, {len(SHIPPING_OPTIONS)} shipping options "
        f"and {len(PAYMENT_METHODS)} payment methods"
    )
    return True
