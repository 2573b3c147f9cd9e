#Fastapi
from fastapi import APIRouter, Path, Body
#Project files
import payback.application.dependencies as deps
import payback.presentation.schemas as schemas
#Typing
import typing as t


########################################
#                Setup                 #
########################################

router = APIRouter(
    prefix="/users",
    tags = ["users"],
    responses={
        400: {"model": schemas.ErrorModel, "description": "Malformed body"},
        401: {"model": schemas.ErrorModel, "description": "Bad credentials"},
        500: {"model": schemas.ErrorModel, "description": "Storage failure"},
    }
    )

import logging
logger = logging.getLogger('app')


########################################
#     ACCOUNT MUTATIONS (re-verified)  #
########################################


@router.patch("/username", description="Change username. Requires current username and password.")
async def update_username(
        account_service: deps.AccountServiceDependency,
        request: schemas.UsernameUpdateModel,
    ) -> schemas.ResponseModel[schemas.PublicUserDTO]:
    return await account_service.update_username(request)


@router.patch("/password", description="Change password. The new password must satisfy the password policy.")
async def update_password(
        account_service: deps.AccountServiceDependency,
        request: schemas.PasswordUpdateModel,
    ) -> schemas.ResponseModel[schemas.PublicUserDTO]:
    return await account_service.update_password(request)


@router.patch("/role", description="Change role of the account")
async def update_role(
        account_service: deps.AccountServiceDependency,
        request: schemas.RoleUpdateModel,
    ) -> schemas.ResponseModel[schemas.PublicUserDTO]:
    return await account_service.update_role(request)


@router.delete("", description="Permanently deletes the account")
async def delete_user(
        account_service: deps.AccountServiceDependency,
        credentials: t.Annotated[schemas.CredentialsModel, Body()],
    ) -> schemas.ResponseModel[schemas.PublicUserDTO]:
    return await account_service.delete(credentials)


########################################
#               LISTING                #
########################################

@router.get('/roles/{role_id}')
async def get_users_by_role(
        account_service: deps.AccountServiceDependency,
        role_id: t.Annotated[int, Path(ge=0, description='Role to list users for')],
    ) -> schemas.ResponseModel[schemas.UserListDTO]:
    '''Returns public fields of every user with the given role'''
    return await account_service.list_by_role(role_id)
