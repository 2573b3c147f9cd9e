import pytest, typing as t, httpx
import pytest_asyncio as pytestaio
from sqlalchemy.pool import StaticPool
from sqlalchemy.ext.asyncio import AsyncSession
from payback.common.config import Config

#Must be set before the app is composed: the issuer and hasher read them once
Config.JWT_SECRET = 'test-jwt-secret-that-is-at-least-32-bytes-long'
Config.BCRYPT_ROUNDS = 4

import payback.infrastructure.dependencies as ideps
import payback.main as main

import logging
logger = logging.getLogger('app')

TEST_DB_URL = 'sqlite+aiosqlite://'
TEST_DB_KWARGS = {'poolclass': StaticPool}


@pytestaio.fixture(scope='function')
async def database_manager() -> t.AsyncGenerator[ideps.DatabaseManagerType, None]:
    mgr = ideps.build_database_manager(TEST_DB_URL, TEST_DB_KWARGS)
    await mgr.initialize_data_structures()
    yield mgr
    await mgr.flush_data()
    await mgr.close()

@pytestaio.fixture(scope="function")
async def db_session(database_manager: ideps.DatabaseManagerType) -> t.AsyncGenerator[AsyncSession, None]:
    async with database_manager.session() as session:
        yield session

@pytestaio.fixture(scope="function")
async def user_directory(db_session: AsyncSession) -> ideps.UserDirectory:
    return ideps.UserDirectory(db_session)

@pytestaio.fixture(scope='function')
async def async_client(database_manager: ideps.DatabaseManagerType) -> t.AsyncGenerator[httpx.AsyncClient, None]:
    app = main.create_app(database_manager)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://payback:8000") as client:
        yield client
