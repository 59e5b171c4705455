# app/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.errors import register_exception_handlers
from app.api.middleware import request_logger
from app.api.routers import auth, cart, health, orders, products, users
from app.data.database import Database
from app.services.lock_service import LockService
from app.utils.settings import APP_ENV
from app.utils.logging import get_logger

logger = get_logger(__name__)


def create_app(
    database: Database | None = None,
    lock_service: LockService | None = None,
) -> FastAPI:
    """
    Punkt wejscia: tu powstaje uchwyt do bazy i klient redis,
    nic nie jest importowane globalnie przez serwisy.
    """
    db = database or Database()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Initializing database...")
        db.create_all()
        yield
        db.dispose()

    app = FastAPI(
        title="Shop Service",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.db = db
    app.state.lock_service = lock_service or LockService()

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if APP_ENV != "production" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if APP_ENV == "development":
        app.middleware("http")(request_logger)

    # Include routers
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(cart.router)
    app.include_router(orders.router)

    return app


if __name__ == "__main__":
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
