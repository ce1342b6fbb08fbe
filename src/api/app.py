import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from src.api.error import ClientError, client_error_handler
from src.api.routes import agreements, bookings, invoices

logger = logging.getLogger(__name__)


def create_app(config) -> FastAPI:
    """Build the FastAPI application from an ApplicationConfig-like object"""
    app = FastAPI(
        title="Rental Document Service",
        description="Charge breakdowns, invoices and rental agreements",
        version="1.0.0",
    )

    if config.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.CORS_ORIGINS,
            allow_credentials=config.CORS_ALLOW_CREDENTIALS,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(ClientError, client_error_handler)

    app.include_router(bookings.router)
    app.include_router(invoices.router)
    app.include_router(agreements.router)

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    logger.info("Application created")
    return app
