"""Database engine and sessions.

API 请求通过 get_db_session 获得带事务的会话（请求结束自动提交）；
Celery 任务与脚本使用 get_async_session，需要自行 commit。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from src.core.config import settings
from src.core.infrastructure.health import DatabaseHealthResult, HealthStatus

async_engine = create_async_engine(
    settings.SQLALCHEMY_DATABASE_URI,
    echo=settings.DB_ECHO,
    pool_pre_ping=True,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
)

SessionFactory = async_sessionmaker(async_engine, expire_on_commit=False)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one transaction per request."""
    async with SessionFactory() as session, session.begin():
        yield session


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Session for code running outside a request.

    Usage:
        async with get_async_session() as session:
            ...
            await session.commit()
    """
    async with SessionFactory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Fail fast when the database is unreachable at startup."""
    try:
        async with async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Failed to connect to database: {e}")
        raise
    logger.info("Database connection established")


async def check_db_health() -> DatabaseHealthResult:
    try:
        async with async_engine.connect() as conn:
            version = (await conn.execute(text("SHOW server_version"))).scalar()
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"Database health check failed: {e}")
        return DatabaseHealthResult(
            status=HealthStatus.ERROR, connected=False, error=str(e)
        )

    return DatabaseHealthResult(
        status=HealthStatus.OK,
        connected=True,
        version=str(version) if version else "unknown",
    )
