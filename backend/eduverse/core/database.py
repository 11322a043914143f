import asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker, AsyncEngine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool
from typing import AsyncGenerator, Optional

from eduverse.core.config import settings
from eduverse.core.logging_config import logger

Base = declarative_base()

# Lazy engine initialization - create on first use to avoid import-time issues
_engine: Optional[AsyncEngine] = None
_async_session_local: Optional[async_sessionmaker[AsyncSession]] = None


def get_database_url() -> str:
    """Get properly formatted database URL"""
    db_url = settings.DATABASE_URL
    if db_url.startswith("postgres://"):
        db_url = db_url.replace("postgres://", "postgresql://", 1)
    if db_url.startswith("postgresql://"):
        db_url = db_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return db_url


def get_engine() -> AsyncEngine:
    """
    Get or create the database engine (lazy initialization).

    Connection pooling strategy:
    - SQLite: NullPool (required for thread safety)
    - PostgreSQL Development: NullPool (simpler debugging)
    - PostgreSQL Production: QueuePool sized from DB_POOL_* settings
    """
    global _engine
    if _engine is None:
        db_url = get_database_url()

        if "sqlite" in db_url:
            _engine = create_async_engine(
                db_url,
                echo=settings.DB_ECHO,
                connect_args={"check_same_thread": False},
                poolclass=NullPool,
            )
        elif settings.DEBUG or settings.ENVIRONMENT == "development":
            _engine = create_async_engine(
                db_url,
                echo=settings.DB_ECHO,
                poolclass=NullPool,
            )
        else:
            _engine = create_async_engine(
                db_url,
                echo=settings.DB_ECHO,
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_MAX_OVERFLOW,
                pool_timeout=settings.DB_POOL_TIMEOUT,
                pool_recycle=settings.DB_POOL_RECYCLE,
                pool_pre_ping=True,  # Verify connections before use
            )
        logger.info(f"Database engine created for {settings.database_backend}")
    return _engine


def get_session_local() -> async_sessionmaker[AsyncSession]:
    """Get or create the session factory (lazy initialization)"""
    global _async_session_local
    if _async_session_local is None:
        _async_session_local = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False
        )
    return _async_session_local


def AsyncSessionLocal() -> AsyncSession:
    """Create a new async session"""
    return get_session_local()()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session - commits if there are pending changes, rolls back on error"""
    session_factory = get_session_local()
    async with session_factory() as session:
        try:
            yield session
            if session.new or session.dirty or session.deleted:
                await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create all tables"""
    import eduverse.models  # noqa: F401  register models with Base.metadata

    eng = get_engine()
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def ping_db() -> None:
    """Round-trip a trivial query; raises on connectivity failure"""
    async with get_session_local()() as session:
        await session.execute(text("SELECT 1"))


async def close_db() -> None:
    """Close database connection"""
    global _engine, _async_session_local
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _async_session_local = None


class DatabaseWatchdog:
    """
    Background probe for the store connection.

    Runs ``ping_db`` every ``interval`` seconds. When a probe fails the pool is
    disposed so that the next request opens fresh connections; recovery is
    logged once when a probe succeeds again.
    """

    def __init__(self, interval_seconds: int = 30):
        self.interval_seconds = interval_seconds
        self.running = False
        self.healthy = True
        self.consecutive_failures = 0
        self._task: Optional[asyncio.Task] = None

    async def start(self) -> None:
        if self.running:
            logger.warning("[DBWatchdog] Already running")
            return
        self.running = True
        self._task = asyncio.create_task(self._watch_loop())
        logger.info(f"[DBWatchdog] Started - interval: {self.interval_seconds}s")

    async def stop(self) -> None:
        self.running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("[DBWatchdog] Stopped")

    async def check_once(self) -> bool:
        """Probe the store once and update health state"""
        try:
            await ping_db()
        except Exception as e:
            self.consecutive_failures += 1
            if self.healthy:
                logger.error(f"[DBWatchdog] Database unreachable: {e}")
            self.healthy = False
            if _engine is not None:
                await _engine.dispose()
            return False

        if not self.healthy:
            logger.info(
                f"[DBWatchdog] Database reachable again after {self.consecutive_failures} failed probe(s)"
            )
        self.healthy = True
        self.consecutive_failures = 0
        return True

    async def _watch_loop(self) -> None:
        while self.running:
            await self.check_once()
            await asyncio.sleep(self.interval_seconds)


db_watchdog = DatabaseWatchdog(interval_seconds=settings.DB_WATCHDOG_INTERVAL_SECONDS)
