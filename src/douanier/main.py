"""
Main FastAPI application entry point.

Uses Application Factory Pattern.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, FastAPI, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from douanier import __version__
from douanier.application.services.session_store import SessionStore
from douanier.config.settings import Settings, get_settings, override_settings
from douanier.di import initialize_container, shutdown_container
from douanier.di.dependencies import get_session_store
from douanier.domain.exceptions import (
    BlockchainError,
    ConfigurationError,
    DouanierException,
)
from douanier.infrastructure.monitoring import get_logger, setup_logging
from douanier.presentation.api.middleware import (
    MetricsMiddleware,
    RequestIDMiddleware,
    douanier_exception_handler,
    request_validation_exception_handler,
)
from douanier.presentation.api.routes import auth, health


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory - creates and configures FastAPI app.

    Args:
        settings: Optional Settings instance (for testing)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()
    else:
        override_settings(settings)

    # Structured logging (JSON only in production)
    json_logs = settings.ENV == "production"
    setup_logging(level=settings.LOG_LEVEL, json_logs=json_logs)
    logger = get_logger(__name__)

    logger.info(f"Creating Douanier application (ENV={settings.ENV})")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting Douanier application...")

        if not settings.RECEIVER_WALLET_ADDRESS:
            raise ConfigurationError(
                "RECEIVER_WALLET_ADDRESS",
                reason="must be set to accept verification payments",
            )

        container = await initialize_container(settings)

        # Ledger reachability is informational; polls degrade to pending
        try:
            version = await container.ledger_matcher.check_connection()
            logger.info(
                f"Connected to Solana {settings.SOLANA_NETWORK} "
                f"(solana-core {version})"
            )
        except BlockchainError as e:
            logger.warning(f"Solana RPC not reachable at startup: {e.message}")

        logger.info(f"Receiver wallet: {settings.RECEIVER_WALLET_ADDRESS}")

        container.sweeper.start()
        logger.info("Douanier application started successfully")

        yield

        logger.info("Shutting down Douanier application...")
        await shutdown_container()
        logger.info("Douanier application shutdown complete")

    app = FastAPI(
        title="Douanier API",
        description="Wallet ownership verification by correlated SOL payment",
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware chain (last added runs first)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DouanierException, douanier_exception_handler)
    app.add_exception_handler(
        RequestValidationError, request_validation_exception_handler
    )

    app.include_router(auth.router, prefix="/api")
    app.include_router(health.router, prefix="/api")

    @app.get("/health", tags=["Health"])
    async def health_check(
        session_store: SessionStore = Depends(get_session_store),
    ):
        """Service status with session counts."""
        counts = await session_store.counts()
        return {
            "status": "ok",
            "service": settings.APP_NAME,
            "version": __version__,
            "network": settings.SOLANA_NETWORK,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "sessions": counts,
        }

    if settings.METRICS_ENABLED:

        @app.get("/metrics", tags=["Monitoring"])
        async def metrics():
            """
            Prometheus metrics endpoint.

            Returns metrics in Prometheus text format for scraping.
            """
            return Response(
                content=generate_latest(),
                media_type=CONTENT_TYPE_LATEST,
            )

    logger.info("Douanier application created successfully")
    return app


def get_app() -> FastAPI:
    """
    Get or create application instance (lazy initialization).

    For uvicorn: uvicorn douanier.main:get_app --factory
    """
    return create_app()


def main():
    """Run the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "douanier.main:get_app",
        factory=True,
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD,
    )


if __name__ == "__main__":
    main()
