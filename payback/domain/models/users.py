import typing as t
import pydantic as p
from payback.domain.services import IPasswordHasherAsync, PasswordPolicy
import payback.domain.exceptions as domexc


class User(p.BaseModel):
    model_config = p.ConfigDict(validate_assignment=True)

    id: int|None = None
    username: str|None = None
    email: str|None = None
    password_hash: str
    role_id: int = p.Field(ge=0)
    logged_in: bool = False

    @staticmethod
    async def _hash_password(password: str, hasher: IPasswordHasherAsync, policy: PasswordPolicy) -> str:
        if not policy.validate(password):
            raise domexc.PasswordPolicyError(policy.describe())
        return await hasher.hash(password)

    @staticmethod
    async def create(
        username: str|None,
        email: str|None,
        password: str,
        role_id: int,
        hasher: IPasswordHasherAsync,
        policy: PasswordPolicy,
    ) -> "User":
        if not (username or email):
            raise domexc.UserValueError("Fields empty or missing")
        password_hash = await User._hash_password(password, hasher, policy)
        return User(
            username=username or None,
            email=email or None,
            password_hash=password_hash,
            role_id=role_id,
        )

    @staticmethod
    async def make_password_hash(new: str, hasher: IPasswordHasherAsync, policy: PasswordPolicy) -> str:
        '''Policy-checked hash for a password change. Does not touch any record'''
        return await User._hash_password(new, hasher, policy)
