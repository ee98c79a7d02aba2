"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from carbon_ledger.api import (
    activity_logs_router,
    credits_router,
    reports_router,
    risk_router,
)
from carbon_ledger.core.config import Config, get_config
from carbon_ledger.database.base import apply_db_migration, get_db_url, get_engine_kw
from carbon_ledger.database.session_manager.db_session import Database
from carbon_ledger.services.ledger import load_coefficient_table
from carbon_ledger.services.payouts.payout_workflow import Scorer
from carbon_ledger.services.risk import AnomalyScorer, RemoteAnomalyScorer

logging.basicConfig(
    level=logging.DEBUG, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def register_routers(app: FastAPI):
    """Register all API routers."""
    app.include_router(activity_logs_router)
    app.include_router(credits_router)
    app.include_router(reports_router)
    app.include_router(risk_router)


def build_anomaly_scorer(config: Config) -> Scorer:
    """
    Pick the payout scorer from the [risk] config section.

    A non-empty scoring_url selects the remote scorer.
    """
    risk_config = config.section("risk")
    time_window_days = int(risk_config.get("time_window_days", 30))
    scoring_url = risk_config.get("scoring_url")

    if scoring_url:
        logging.info(f"Payouts will be scored remotely at {scoring_url}")
        return RemoteAnomalyScorer(
            scoring_url,
            jwt_secret=config.jwt_secret,
            jwt_algorithm=config.jwt_algorithm,
            timeout_seconds=float(risk_config.get("timeout_seconds", 5.0)),
            time_window_days=time_window_days,
        )
    return AnomalyScorer(time_window_days=time_window_days)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    Handles database initialization and cleanup.
    """
    logging.info("Application startup")
    config = app.state.config
    async_db_url = get_db_url(config)

    if config.section("db").get("run_migrations", False):
        await apply_db_migration(config)

    Database.init(async_db_url, engine_kw=get_engine_kw(async_db_url))
    logging.info("Initialized database")

    try:
        yield
    finally:
        await Database.dispose()
        logging.info("Application shutdown")


def get_app(config_file: str) -> FastAPI:
    """
    Application factory function.

    Args:
        config_file: Configuration file name (e.g., "production.toml")

    Returns:
        Configured FastAPI application instance
    """
    config = get_config(config_file)
    api_config = config.section("api")

    app = FastAPI(
        title=api_config.get("title", "Carbon Ledger API"),
        description=api_config.get(
            "description", "Carbon-credit ledger and payout risk engine"
        ),
        version=api_config.get("version", "1.0.0"),
        debug=api_config.get("debug", False),
        lifespan=lifespan,
        generate_unique_id_function=lambda route: (
            f"{route.tags[0]}-{route.name}" if route.tags else route.name
        ),
    )

    app.state.config = config
    # Loaded once and read-only for the lifetime of the process
    app.state.coefficients = load_coefficient_table(config)
    app.state.anomaly_scorer = build_anomaly_scorer(config)

    register_routers(app)

    origins = [
        "http://localhost:3000",  # For local development
        "http://127.0.0.1:3000",
    ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "Carbon Ledger API",
            "version": app.version,
            "docs": "/docs",
            "redoc": "/redoc",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "carbon-ledger"}

    return app
