import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from src.app.containers import Container
from src.app.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def application(
    container: Container | None = None,
    create_schema: bool = False,
) -> AsyncIterator[Container]:
    """
    Application lifespan: open the shared connection pool, yield the wired
    container, dispose the pool on exit.

    Args:
        container: Optional DI container. If not provided, creates a new one.
        create_schema: Create the tables from the ORM metadata on startup.
            Meant for local bootstrapping and tests; schema changes belong to
            migrations.
    """
    container = container or Container()
    config = container.config()
    configure_logging(config.log_level)
    logger.info("Starting %s %s...", config.app_name, config.app_version)

    db = container.database()
    if create_schema:
        await db.create_schema()

    try:
        yield container
    finally:
        logger.info("Shutting down %s...", config.app_name)
        await db.dispose()
