# app/api/__init__.py
from fastapi import FastAPI
from app.api.routers import availability, carts, checkout, health


def create_app() -> FastAPI:
    app = FastAPI(
        title="Billboard Cart Service",
        version="1.0.0",
    )

    app.include_router(health.router)
    app.include_router(carts.router)
    app.include_router(checkout.router)
    app.include_router(availability.router)

    return app
