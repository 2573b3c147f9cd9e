import payback.infrastructure.exceptions as exc
import payback.infrastructure.interfaces as mgrs

import typing as t
import sqlmodel as sqlm

from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine


import asyncio
import contextlib
import logging

logger = logging.getLogger('app.storage')


class SQLAlchemySessionManager(mgrs.SessionManagerInterface[AsyncConnection, AsyncSession]):
    """DBSessionManager - credit to: Thomas's Aitken article at Medium.com
    Owns one async engine for the application lifetime and hands out sessions/connections
    that are rolled back on error and always closed.

    The composition root creates exactly one instance and passes it down via app.state.
    After close() every method raises StorageNotInitialized.
    """

    def __init__(self, host: str, engine_kwargs: dict[str, t.Any] | None = None):
        self._engine: AsyncEngine | None = create_async_engine(host, **(engine_kwargs or {}))
        self._sessionmaker = async_sessionmaker(autocommit=False, bind=self._engine, expire_on_commit=False)

    @property
    def engine(self) -> AsyncEngine | None:
        return self._engine

    def _require_engine(self) -> AsyncEngine:
        if self._engine is None:
            raise exc.StorageNotInitialized("[DB Manager] Session manager is closed")
        return self._engine

    async def close(self) -> None:
        engine = self._require_engine()
        await engine.dispose()
        self._engine = None
        self._sessionmaker = None
        logger.info('[DB Manager] Engine disposed')

    @contextlib.asynccontextmanager
    async def connect(self) -> t.AsyncIterator[AsyncConnection]:
        engine = self._require_engine()
        async with engine.begin() as connection:
            try:
                yield connection
            except Exception:
                await connection.rollback()
                raise

    @contextlib.asynccontextmanager
    async def session(self) -> t.AsyncIterator[AsyncSession]:
        self._require_engine()
        session = self._sessionmaker()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


    async def wait_for_startup(self, attempts: int = 5, interval_sec: float = 5):
        """Sends SELECT 1 until the database answers. Raises StorageBootError after `attempts` failures"""
        for attempt in range(1, attempts + 1):
            try:
                async with self.session() as session:
                    await session.execute(sqlm.text("SELECT 1"))
                logger.info("[WAIT FOR DB] SELECT 1 Executed -> Database is up and running!")
                return
            except exc.StorageNotInitialized:
                raise
            except Exception as e:
                logger.debug(e)
                logger.info(f"[WAIT FOR DB] Database is not ready yet, retrying ({attempt}/{attempts})...")
                await asyncio.sleep(interval_sec)
        logger.error(f"[WAIT FOR DB] Database is not available after all {attempts} retries.")
        raise exc.StorageBootError(f"Database failed to boot within {attempts*interval_sec}sec!")

    async def initialize_data_structures(self):
        '''Creates missing tables. Existing ones are left untouched'''
        engine = self._require_engine()
        logger.info('[INIT DB] Creating tables...')
        async with engine.begin() as conn:
            await conn.run_sync(sqlm.SQLModel.metadata.create_all)

    async def flush_data(self):
        engine = self._require_engine()
        logger.info('[DB] Flush_all called -> Dropping all tables.')
        async with engine.begin() as conn:
            await conn.run_sync(sqlm.SQLModel.metadata.drop_all)
