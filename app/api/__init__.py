# app/api/__init__.py
from fastapi import FastAPI
from app.api.errors import register_error_handlers
from app.api.routers import health, users, products, carts


def create_app(lifespan=None) -> FastAPI:
    app = FastAPI(
        title="Shop Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    register_error_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(carts.router)

    return app
