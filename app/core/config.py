from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Storefront API"
    DATABASE_URL: str = "sqlite:///./storefront.db"
    SECRET_KEY: str = "supersecretkey_change_me_in_production"

    # Session cookie
    SESSION_COOKIE_NAME: str = "storefront_session"
    SESSION_MAX_AGE: int = 60 * 60 * 24 * 7 # 1 week

    LOG_LEVEL: str = "INFO"
    SEED_ON_STARTUP: bool = True
    CORS_ORIGINS: List[str] = ["*"]

    # Checkout / recommendation rules
    FREE_SHIPPING_THRESHOLD: float = 300.0
    RECOMMENDATION_LIMIT: int = 8
    SIMILAR_PRODUCTS_LIMIT: int = 4

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
