import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
)
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from roster.exceptions import StoreFailure
from roster.logging import logger
from roster.settings import app_settings
from roster.utils.query_monitor import enable_query_monitoring

# Enable database query performance monitoring
enable_query_monitoring()


def build_engine(url: str) -> AsyncEngine:
    """
    Create an async engine for the given database URL.

    Server databases get the configured connection pool. SQLite shares a
    single connection (StaticPool) so that in-memory databases survive
    across sessions.

    Args:
        url: SQLAlchemy database URL with an async driver.

    Returns:
        AsyncEngine bound to the URL.
    """
    if url.startswith("sqlite"):
        return create_async_engine(
            url,
            echo=app_settings.DB_ECHO,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(
        url,
        echo=app_settings.DB_ECHO,
        pool_size=app_settings.DB_POOL_SIZE,
        max_overflow=app_settings.DB_MAX_OVERFLOW,
        pool_recycle=app_settings.DB_POOL_RECYCLE,
        pool_pre_ping=app_settings.DB_POOL_PRE_PING,
    )


def build_session_factory(bind: AsyncEngine) -> sessionmaker:
    return sessionmaker(bind, expire_on_commit=False, class_=AsyncSession)


engine: AsyncEngine = build_engine(app_settings.DATABASE_URL)
async_session = build_session_factory(engine)


async def init_db(bind: AsyncEngine | None = None) -> None:
    """
    Create all member/team tables that do not exist yet.

    Args:
        bind: Engine to create the tables on. Defaults to the module engine.
    """
    # Register table models on SQLModel.metadata
    import roster.models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def wait_for_store(
    retry_interval: int | None = None,
    max_retries: int | None = None,
    bind: AsyncEngine | None = None,
) -> None:
    """
    Wait until the database accepts connections.

    Only used at startup; queries issued through repositories are never
    retried.

    Args:
        retry_interval: Time in seconds between retries.
            Defaults to app_settings.DB_INIT_RETRY_INTERVAL
        max_retries: Maximum number of retries before giving up.
            Defaults to app_settings.DB_INIT_MAX_RETRIES
        bind: Engine to probe. Defaults to the module engine.

    Raises:
        StoreFailure: If the database is still unreachable after the last
            attempt.
    """
    if retry_interval is None:
        retry_interval = app_settings.DB_INIT_RETRY_INTERVAL
    if max_retries is None:
        max_retries = app_settings.DB_INIT_MAX_RETRIES
    bind = bind or engine

    for attempt in range(max_retries):
        try:
            async with bind.connect() as conn:
                await conn.exec_driver_sql("SELECT 1")
            logger.info("Database is now ready.")
            return
        except OperationalError:
            logger.warning(
                f"Database not ready, retrying in {retry_interval} seconds... (Attempt {attempt + 1}/{max_retries})"
            )
            await asyncio.sleep(retry_interval)

    logger.error("Failed to connect to the database after multiple attempts.")
    raise StoreFailure(
        "Database connection could not be established.", operation="connect"
    )


@asynccontextmanager
async def session_scope(
    factory: sessionmaker | None = None,
) -> AsyncIterator[AsyncSession]:
    """
    Acquire a session for one unit of work.

    Commits when the block exits normally, rolls back and re-raises when
    it fails, and always closes the session.

    Args:
        factory: Session factory to use. Defaults to the module factory.

    Example:
        ```python
        async with session_scope() as session:
            repo = MemberRepository(session)
            page = await repo.search_page(condition, PageRequest.of(0, 20))
        ```
    """
    async with (factory or async_session)() as session:
        try:
            yield session
            await session.commit()
        except IntegrityError as ex:
            await session.rollback()
            logger.error(f"Database integrity error: {ex}")
            raise
        except SQLAlchemyError as ex:
            await session.rollback()
            logger.error(f"Database error: {ex}")
            raise
        except Exception:
            await session.rollback()
            raise
