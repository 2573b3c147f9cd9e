#Fastapi
from fastapi import APIRouter, status

#Project files
import payback.presentation.schemas as schemas
import payback.application.dependencies as appdeps

import logging

logger = logging.getLogger('app')
router = APIRouter(
    prefix="/auth",
    tags = ["auth"],
    responses={
        400: {"model": schemas.ErrorModel, "description": "Malformed body"},
        500: {"model": schemas.ErrorModel, "description": "Storage or token failure"},
    }
    )



@router.post("/register", status_code=status.HTTP_201_CREATED, responses={
    400: {"model": schemas.ErrorModel, "description":"Username and email both missing, password violates the policy or account already exists"},
    },
    description='Creates an account. Only public fields are returned.')
async def register(
        account_service: appdeps.AccountServiceDependency,
        data: schemas.RegistrationModel,
    ) -> schemas.ResponseModel[schemas.PublicUserDTO]:
    return await account_service.register(data)


@router.post("/login", responses={
    401: {"model": schemas.ErrorModel, "description":"Bad credentials"},
    },
    description='If credentials are valid - returns a signed token and marks the user as logged in')
async def login(
        account_service: appdeps.AccountServiceDependency,
        credentials: schemas.CredentialsModel,
    ) -> schemas.ResponseModel[schemas.LoginDTO]:
    return await account_service.login(credentials)


@router.post("/logout", responses={
    401: {"model": schemas.ErrorModel, "description":"Bad credentials"},
    },
    description='Marks the user as logged out. Issued tokens stay valid until they expire')
async def logout(
        account_service: appdeps.AccountServiceDependency,
        credentials: schemas.CredentialsModel,
    ) -> schemas.ResponseModel[schemas.PublicUserDTO]:
    return await account_service.logout(credentials)
