from fastapi import Depends
import typing as t

import payback.infrastructure.dependencies as ideps
import payback.application.services as services
import payback.domain.services as domsvc
from payback.common.config import Config


def build_password_policy() -> domsvc.PasswordPolicy:
    return domsvc.PasswordPolicy(
        min_length=Config.PASSWORD_MIN_LENGTH,
        max_bytes=Config.PASSWORD_MAX_BYTES,
        require_lower=Config.PASSWORD_REQUIRE_LOWER,
        require_upper=Config.PASSWORD_REQUIRE_UPPER,
        require_digit=Config.PASSWORD_REQUIRE_DIGIT,
        require_special=Config.PASSWORD_REQUIRE_SPECIAL,
    )

async def get_account_service(
        user_directory: ideps.UserDirectoryDependency,
        hasher: ideps.PasswordHasherDependency,
        token_issuer: ideps.TokenIssuerDependency,
        dummy_hash: ideps.DummyPasswordHashDependency,
    ):
    return services.AccountService(
        user_directory,
        hasher,
        token_issuer,
        build_password_policy(),
        dummy_hash=dummy_hash,
        fanout_limit=Config.FANOUT_WORKERS,
    )

AccountServiceDependency = t.Annotated[services.AccountService, Depends(get_account_service)]
