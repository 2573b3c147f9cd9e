import payback.domain.exceptions as domexc
import payback.application.exceptions as appexc
import payback.infrastructure.exceptions as infraexc
from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger('app')

STORAGE_FAILURE_MESSAGE = "Internal storage error"


def register_exception_handlers(app):

    @app.exception_handler(appexc.AuthBaseException)
    async def auth_exception_handler(request, exc: appexc.AuthBaseException):
        mapping = {
            appexc.CredentialsException: status.HTTP_401_UNAUTHORIZED,
            appexc.TokenIssueError: status.HTTP_500_INTERNAL_SERVER_ERROR,
        }
        status_code = mapping.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        if status_code >= 500:
            logger.error(f'[AUTH] {exc!r}')
        return JSONResponse({"message": str(exc)}, status_code=status_code)


    @app.exception_handler(domexc.BaseUserException)
    async def user_exception_handler(request, exc: domexc.BaseUserException):
        mapping = {
            domexc.UserValueError: status.HTTP_400_BAD_REQUEST,
            domexc.PasswordPolicyError: status.HTTP_400_BAD_REQUEST,
            domexc.UserAlreadyExists: status.HTTP_400_BAD_REQUEST,
            domexc.UserIntegrityError: status.HTTP_400_BAD_REQUEST,
        }
        status_code = mapping.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        return JSONResponse({"message": str(exc)}, status_code=status_code)


    @app.exception_handler(infraexc.CustomStorageException)
    async def storage_exception_handler(request, exc: infraexc.CustomStorageException):
        logger.error(f'[STORAGE] {exc!r}')
        return JSONResponse({"message": STORAGE_FAILURE_MESSAGE}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request, exc: RequestValidationError):
        fields = sorted({".".join(str(part) for part in err.get("loc", ())[1:]) or "body" for err in exc.errors()})
        return JSONResponse(
            {"message": f"Fields empty, missing or malformed: {', '.join(fields)}"},
            status_code=status.HTTP_400_BAD_REQUEST,
        )
