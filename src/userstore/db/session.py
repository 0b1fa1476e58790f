from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from userstore.config.settings import Settings, get_settings
from userstore.db.executor import SQLAlchemyExecutor


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    Create the AsyncEngine for the live database described by `settings`.
    """
    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.SQLALCHEMY_ECHO,   # Set to False in production
        pool_pre_ping=True,              # Enables connection health checks
    )


@lru_cache()
def get_executor() -> SQLAlchemyExecutor:
    """Process-wide executor for the live database (built lazily from get_settings())."""
    return SQLAlchemyExecutor(create_engine_from_settings(get_settings()))
