"""Process-level wiring of the cache and auth components.

Everything with a lifecycle (Redis pool, database engine) is created once
here and injected downward; nothing below this module holds global state.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

import structlog
from redis.asyncio.connection import ConnectionPool
from sqlalchemy.ext.asyncio import AsyncEngine

from authcache.config import Settings, get_settings
from authcache.core.auth.loader import SessionUserLoader
from authcache.core.auth.oauth import GoogleOAuthProvider
from authcache.core.cache.cache import ReadThroughCache
from authcache.core.cache.store import RedisKeyValueStore, create_redis_pool
from authcache.core.database import create_engine, create_session_factory
from authcache.core.logging import configure_logging
from authcache.modules.users.repos import UserRepository


logger = structlog.get_logger()


@dataclass
class Components:
    """Long-lived objects shared by all requests."""

    redis_pool: "ConnectionPool[Any]"
    engine: AsyncEngine
    store: RedisKeyValueStore
    cache: ReadThroughCache
    directory: UserRepository
    loader: SessionUserLoader
    oauth_provider: GoogleOAuthProvider


def create_components(settings: Settings) -> Components:
    """Build the component graph from settings.

    Connections are opened lazily by the pools on first use.
    """
    redis_pool = create_redis_pool(settings)
    engine = create_engine(settings)

    store = RedisKeyValueStore.from_pool(redis_pool)
    cache = ReadThroughCache(store)
    directory = UserRepository(create_session_factory(engine))

    return Components(
        redis_pool=redis_pool,
        engine=engine,
        store=store,
        cache=cache,
        directory=directory,
        loader=SessionUserLoader(cache, directory),
        oauth_provider=GoogleOAuthProvider.from_settings(settings),
    )


async def close_components(components: Components) -> None:
    """Release pooled connections. Call during process shutdown.

    Every release step runs even if an earlier one fails; the failure
    is re-raised once all steps have run.
    """
    try:
        try:
            await components.store.aclose()
        finally:
            await components.redis_pool.disconnect()
            logger.info("redis_pool_closed")
    finally:
        await components.engine.dispose()
        logger.info("database_engine_disposed")


@asynccontextmanager
async def components_lifespan(
    settings: Settings | None = None,
) -> AsyncGenerator[Components, None]:
    """Own the components for the lifetime of the process.

    Usage:
        async with components_lifespan() as components:
            user = await components.loader.load(session_id)
    """
    settings = settings or get_settings()
    configure_logging(settings)

    logger.info(
        "application_startup",
        app_name=settings.app_name,
        environment=settings.environment,
        oauth_configured=bool(settings.google_client_id and settings.google_client_secret),
    )
    components = create_components(settings)
    try:
        yield components
    finally:
        logger.info("application_shutdown")
        await close_components(components)
