"""
Database base configuration.

Builds the async engine URL from config and runs Alembic migrations.
"""
import asyncio
import functools
import logging
from pathlib import Path
from typing import Any

from alembic import command
from alembic.config import Config as alembic_config
from sqlalchemy.engine.url import URL

from carbon_ledger.core.config import Config

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

engine_kw = {
    "pool_pre_ping": True,
    # feature will normally emit SQL equivalent to "SELECT 1" each time a connection is checked out from the pool
    "pool_size": 2,  # number of connections to keep open at a time
    "max_overflow": 4,  # number of connections to allow to be opened above pool_size
    "connect_args": {
        "prepared_statement_cache_size": 0,  # disable prepared statement cache
        "statement_cache_size": 0,  # disable statement cache
    },
}

# Keys in the [db] section that are not URL components
_NON_URL_KEYS = {"drivername", "run_migrations"}


def get_db_url(config: Config) -> URL:
    """
    Construct database URL from config.
    """
    config_db = config.data["db"]
    url_params = {k: v for k, v in config_db.items() if k not in _NON_URL_KEYS}
    drivername = config_db.get("drivername", "postgresql+asyncpg")
    return URL.create(drivername=drivername, **url_params)


def get_engine_kw(async_db_url: URL) -> dict[str, Any]:
    """
    Engine keyword arguments for the given URL.

    Pool sizing and asyncpg statement-cache options only apply to PostgreSQL.
    """
    if async_db_url.get_backend_name() == "postgresql":
        return engine_kw
    return {}


async def apply_db_migration(config: Config):
    """
    Apply database migrations before the application starts serving requests.

    Args:
        config: The application configuration containing database connection details.
    """
    alembic_cfg = alembic_config(str(PROJECT_ROOT / "alembic.ini"))
    alembic_cfg.set_main_option(
        "script_location", str(PROJECT_ROOT / "alembic_migrations")
    )

    # Alembic runs with a synchronous driver
    async_url = get_db_url(config)
    sync_url = async_url.set(
        drivername=async_url.drivername.replace("+asyncpg", "").replace(
            "+aiosqlite", ""
        )
    )
    alembic_cfg.set_main_option(
        "sqlalchemy.url", sync_url.render_as_string(hide_password=False)
    )

    logging.info("Starting database migrations...")
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(
        None, functools.partial(command.upgrade, alembic_cfg, "head")
    )
    logging.info("Database migration completed successfully")
