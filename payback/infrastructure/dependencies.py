from fastapi import Depends, Request
import typing as t

import payback.infrastructure.repositories as repos
import payback.infrastructure.security as security
import payback.infrastructure.adapters as adap
import payback.domain.services as domsvc
import payback.application.interfaces as iapp
from payback.infrastructure.db import SQLAlchemySessionManager
from payback.common.config import Config

from sqlalchemy.ext.asyncio import AsyncSession


#Auth infrastructure choices
TokenIssuerType = security.JWTTokenIssuer

_PasswordHasherType = security.BCryptHasher
PasswordHasherType = lambda: adap.AsyncHasher(_PasswordHasherType(rounds=Config.BCRYPT_ROUNDS))

DUMMY_PASSWORD = "dummy-password-for-timing"

def build_dummy_password_hash() -> str:
    '''Called once by the composition root. Same algorithm and cost as real hashes, so an unknown username costs one verify like a wrong password does'''
    return _PasswordHasherType(rounds=Config.BCRYPT_ROUNDS).hash(DUMMY_PASSWORD)


#####################################
#             Databases             #
#####################################

DatabaseManagerType = SQLAlchemySessionManager
DatabaseSessionType = AsyncSession

def build_database_manager(url: str | None = None, engine_kwargs: dict[str, t.Any] | None = None) -> DatabaseManagerType:
    '''Called once by the composition root. The manager lives on app.state, never in module globals'''
    return DatabaseManagerType(url or Config.DB_URL, engine_kwargs if engine_kwargs is not None else Config.DB_KWARGS)

def get_database_manager(request: Request) -> DatabaseManagerType:
    return request.app.state.database_manager

async def get_db_session(manager: t.Annotated[DatabaseManagerType, Depends(get_database_manager)]) -> t.AsyncIterator[DatabaseSessionType]:
    async with manager.session() as session:
        yield session

DatabaseDependency = t.Annotated[DatabaseSessionType, Depends(get_db_session)]


#####################################
#      Security (app-wide state)    #
#####################################

def get_password_hasher(request: Request) -> domsvc.IPasswordHasherAsync:
    return request.app.state.password_hasher

def get_token_issuer(request: Request) -> iapp.ITokenIssuer:
    return request.app.state.token_issuer

def get_dummy_password_hash(request: Request) -> str:
    return request.app.state.dummy_password_hash

PasswordHasherDependency = t.Annotated[domsvc.IPasswordHasherAsync, Depends(get_password_hasher)]
TokenIssuerDependency = t.Annotated[iapp.ITokenIssuer, Depends(get_token_issuer)]
DummyPasswordHashDependency = t.Annotated[str, Depends(get_dummy_password_hash)]


#####################################
#            Repositories           #
#####################################

UserDirectory = repos.SQLAUserDirectory

async def get_user_directory(session: DatabaseDependency) -> UserDirectory:
    return UserDirectory(session)

UserDirectoryDependency = t.Annotated[UserDirectory, Depends(get_user_directory)]
