import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session
from starlette.middleware.sessions import SessionMiddleware

from app.core.config import settings
from app.core.exceptions import register_exception_handlers
from app.core.logging import RequestLoggingMiddleware, setup_logging
from app.db.session import create_db_and_tables, engine
from app.db.seed import seed_catalog
from app.routers import auth, cart, orders, payment, products, recommendations, shipping, users

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    if settings.SEED_ON_STARTUP:
        with Session(engine) as session:
            seed_catalog(session)
    logger.info(f"{settings.PROJECT_NAME} started")
    yield

def create_app() -> FastAPI:
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        lifespan=lifespan,
        description="Storefront API: catalog, cart, checkout, orders and recommendations",
    )

    @app.get("/ping")
    def ping():
        return {"status": "ok"}

    app.include_router(auth.router, prefix="/api", tags=["auth"])
    app.include_router(products.router, prefix="/api", tags=["products"])
    app.include_router(cart.router, prefix="/api/cart", tags=["cart"])
    app.include_router(shipping.router, prefix="/api/shipping", tags=["shipping"])
    app.include_router(payment.router, prefix="/api/payment", tags=["payment"])
    app.include_router(orders.router, prefix="/api/orders", tags=["orders"])
    app.include_router(users.router, prefix="/api/user", tags=["users"])
    app.include_router(recommendations.router, prefix="/api/recommendations", tags=["recommendations"])

    register_exception_handlers(app)

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SECRET_KEY,
        session_cookie=settings.SESSION_COOKIE_NAME,
        max_age=settings.SESSION_MAX_AGE,
        same_site="lax",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
